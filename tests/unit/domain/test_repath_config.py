from __future__ import annotations

"""
Unit tests for the default configuration and grammar derivation.
"""

import os

from repath.domain.config import get_default_config, grammar_from_config
from repath.domain.path_models import DEFAULT_GRAMMAR, ReferenceGrammar


def test_default_config_keys():
    cfg = get_default_config()

    assert cfg["root_path"] == os.getcwd()
    assert cfg["source_root"] == "src"
    assert cfg["extensions"] == [".lua", ".luau"]
    assert cfg["env_suffixes"] == ["server", "client", "shared"]
    assert cfg["init_token"] == "init"
    assert cfg["ignore_file"] == ".repathignore"
    assert cfg["default_ignores"] == [".git", "node_modules"]
    assert cfg["respect_ignore_file"] is True


def test_default_config_returns_fresh_lists():
    first = get_default_config()
    first["extensions"].append(".txt")
    assert get_default_config()["extensions"] == [".lua", ".luau"]


def test_grammar_from_default_config():
    assert grammar_from_config(get_default_config()) == DEFAULT_GRAMMAR


def test_grammar_from_custom_config():
    cfg = get_default_config()
    cfg.update({"datamodel_root": "root", "anchor_accessor": "Anchor", "alias_keyword": "let"})

    assert grammar_from_config(cfg) == ReferenceGrammar("root", "Anchor", "let")


def test_grammar_from_config_falls_back_on_empty_values():
    assert grammar_from_config({"datamodel_root": ""}) == DEFAULT_GRAMMAR
