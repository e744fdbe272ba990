from __future__ import annotations

"""
Unit tests for candidate file discovery.
"""

from pathlib import Path

from repath.core.services.ignore_rules import IgnoreSet
from repath.core.services.scanner import yield_candidate_files


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("return {}\n", encoding="utf-8")


def test_yields_sorted_source_files(tmp_path: Path):
    _touch(tmp_path / "src" / "b.luau")
    _touch(tmp_path / "src" / "a.lua")
    _touch(tmp_path / "src" / "notes.txt")
    _touch(tmp_path / "src" / "Upper.LUA")
    _touch(tmp_path / "src" / "sub" / "c.lua")

    entries = list(yield_candidate_files(str(tmp_path), [".lua", ".luau"], IgnoreSet()))

    assert [e["rel_path"] for e in entries] == ["src/Upper.LUA", "src/a.lua", "src/b.luau", "src/sub/c.lua"]
    assert entries[1]["file_name"] == "a.lua"
    assert entries[1]["file_path"] == str(tmp_path / "src" / "a.lua")


def test_ignored_directories_are_pruned(tmp_path: Path):
    _touch(tmp_path / "node_modules" / "m.lua")
    _touch(tmp_path / "Packages" / "p.lua")
    _touch(tmp_path / "src" / "a.lua")
    _touch(tmp_path / "src" / "a.spec.lua")

    ignore = IgnoreSet(["node_modules", "Packages/", "*.spec.lua"])
    entries = list(yield_candidate_files(str(tmp_path), [".lua"], ignore))

    assert [e["rel_path"] for e in entries] == ["src/a.lua"]


def test_extension_whitelist(tmp_path: Path):
    _touch(tmp_path / "src" / "a.lua")
    _touch(tmp_path / "src" / "b.luau")

    entries = list(yield_candidate_files(str(tmp_path), [".luau"], IgnoreSet()))

    assert [e["rel_path"] for e in entries] == ["src/b.luau"]
