from __future__ import annotations

"""
Configuration Domain Management.

Defines the default runtime configuration (a plain dictionary consumed by
the refactor engine) and derives the reference grammar from it.
"""

import os
from typing import Any, Dict

from repath.domain.constants import (
    DEFAULT_ALIAS_KEYWORD,
    DEFAULT_ANCHOR_ACCESSOR,
    DEFAULT_DATAMODEL_ROOT,
    DEFAULT_ENV_SUFFIXES,
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORES,
    DEFAULT_INIT_TOKEN,
    DEFAULT_SOURCE_ROOT,
    IGNORE_FILE_NAME,
    PROJECT_FILE_SUFFIX,
)
from repath.domain.path_models import ReferenceGrammar

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Project
        "root_path": os.getcwd(),
        "source_root": DEFAULT_SOURCE_ROOT,
        "project_file_suffix": PROJECT_FILE_SUFFIX,

        # Source files
        "extensions": list(DEFAULT_EXTENSIONS),
        "env_suffixes": list(DEFAULT_ENV_SUFFIXES),
        "init_token": DEFAULT_INIT_TOKEN,

        # Reference grammar
        "datamodel_root": DEFAULT_DATAMODEL_ROOT,
        "anchor_accessor": DEFAULT_ANCHOR_ACCESSOR,
        "alias_keyword": DEFAULT_ALIAS_KEYWORD,

        # Filtering
        "ignore_file": IGNORE_FILE_NAME,
        "default_ignores": list(DEFAULT_IGNORES),
        "respect_ignore_file": True,
    }


def grammar_from_config(config: Dict[str, Any]) -> ReferenceGrammar:
    """
    Build the reference grammar described by a configuration.

    Args:
        config: Validated configuration dictionary.

    Returns:
        ReferenceGrammar: Grammar used for every text-level operation.
    """
    return ReferenceGrammar(
        root=config.get("datamodel_root") or DEFAULT_DATAMODEL_ROOT,
        accessor=config.get("anchor_accessor") or DEFAULT_ANCHOR_ACCESSOR,
        alias_keyword=config.get("alias_keyword") or DEFAULT_ALIAS_KEYWORD,
    )
