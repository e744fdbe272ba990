from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the refactor engine, ensuring that the
configuration dictionary conforms to the expected schema. Handles type
coercion, list normalization and default value injection.
"""

import logging
import os
import re
from typing import Any, Dict, List, Tuple

from repath.domain.config import get_default_config
from repath.domain.constants import DEFAULT_ENV_SUFFIXES, DEFAULT_EXTENSIONS
from repath.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_GRAMMAR_TOKEN_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (CLI overrides, JSON dumps) into strictly
    typed parameters and fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    string_fields = [
        "root_path", "source_root", "project_file_suffix", "init_token",
        "datamodel_root", "anchor_accessor", "alias_keyword", "ignore_file",
    ]

    bool_fields = ["respect_ignore_file"]

    list_fields = ["extensions", "env_suffixes", "default_ignores"]

    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    for field in list_fields:
        merged[field] = _as_list_str(
            merged.get(field), defaults[field], field, warnings, strict
        )

    merged["root_path"] = normalize_path(merged["root_path"], os.getcwd())
    merged["extensions"] = _normalize_extensions(merged["extensions"], warnings, strict)
    merged["env_suffixes"] = _normalize_suffixes(merged["env_suffixes"])

    for field in ("datamodel_root", "anchor_accessor", "alias_keyword"):
        if not _GRAMMAR_TOKEN_RX.match(merged[field]):
            msg = f"Invalid field '{field}': '{merged[field]}' is not an identifier."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Using fallback.")
            merged[field] = defaults[field]

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Ensure all file extensions are lowercase and prefixed with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        if e not in out:
            out.append(e)
    return out if out else list(DEFAULT_EXTENSIONS)


def _normalize_suffixes(suffixes: List[str]) -> List[str]:
    """Script context tags are compared without dots and case-insensitively."""
    out = [s.strip().lstrip(".").lower() for s in suffixes]
    out = [s for s in out if s]
    return out if out else list(DEFAULT_ENV_SUFFIXES)
