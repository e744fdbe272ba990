from __future__ import annotations

"""
Filesystem to DataModel Path Resolution.

Converts a root-relative source file path into the logical path of the
ModuleScript Rojo builds from it. The project tree is consulted first
(longest directory prefix bound through ``$path``); otherwise the first
directory below the source root is taken as the service.

Examples (no project tree):
    src/ServerScriptService/MyModule.lua       -> game:GetService("ServerScriptService").MyModule
    src/ServerScriptService/init.server.lua    -> game:GetService("ServerScriptService")
    src/ReplicatedStorage/My Folder/Util.luau  -> game:GetService("ReplicatedStorage")["My Folder"].Util

Only a module named exactly ``init`` (case-insensitive) stands for its
folder; ``initialize.lua`` and ``InitService.lua`` stay ordinary modules.
"""

import logging
import posixpath
from typing import Any, Dict, List, Optional, Sequence

from repath.core.resolution.project_tree import find_path_in_tree, load_hierarchy_tree
from repath.domain.config import get_default_config
from repath.domain.constants import (
    DEFAULT_ENV_SUFFIXES,
    DEFAULT_EXTENSIONS,
    DEFAULT_INIT_TOKEN,
    DEFAULT_SOURCE_ROOT,
)
from repath.domain.path_models import LogicalPath, format_segment
from repath.domain.tree_models import HierarchyNode

logger = logging.getLogger(__name__)

__all__ = [
    "format_segment",
    "module_name_from_filename",
    "resolve_logical_path",
    "resolve_directory_path",
    "resolve_project_path",
]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def module_name_from_filename(
        file_name: str,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        env_suffixes: Sequence[str] = DEFAULT_ENV_SUFFIXES,
) -> str:
    """
    Strip a source file name down to the instance name Rojo gives it.

    ``Foo.server.lua`` -> ``Foo``; ``Foo.luau`` -> ``Foo``. Files with an
    unrecognized extension keep their full name.

    Args:
        file_name: Base name of the file.
        extensions: Recognized source extensions (with dot).
        env_suffixes: Script context tags stripped after the extension.

    Returns:
        str: The module name.
    """
    stem, ext = posixpath.splitext(file_name)
    if ext.lower() not in {e.lower() for e in extensions}:
        return file_name

    base, tag = posixpath.splitext(stem)
    if tag and tag[1:].lower() in {s.lower() for s in env_suffixes}:
        return base
    return stem


def resolve_logical_path(
        rel_path: str,
        tree: Optional[HierarchyNode] = None,
        config: Optional[Dict[str, Any]] = None,
) -> Optional[LogicalPath]:
    """
    Resolve a root-relative source file path to its logical path.

    Args:
        rel_path: Posix (or Windows) path relative to the project root.
        tree: Optional hierarchy tree loaded from the project document.
        config: Optional validated configuration.

    Returns:
        Optional[LogicalPath]: The logical path, or None when no service can
                               be derived (file directly under the root or
                               the source root).
    """
    cfg = config or get_default_config()
    normalized = rel_path.replace("\\", "/")
    dir_name, file_name = posixpath.split(normalized)

    module_name = module_name_from_filename(
        file_name,
        cfg.get("extensions", DEFAULT_EXTENSIONS),
        cfg.get("env_suffixes", DEFAULT_ENV_SUFFIXES),
    )
    init_token = cfg.get("init_token", DEFAULT_INIT_TOKEN)
    leaf = None if module_name.lower() == init_token.lower() else module_name

    logger.debug(f"Resolving '{normalized}' (module: {module_name})")
    return _resolve_parts(_split_dir(dir_name), leaf, tree, cfg)


def resolve_directory_path(
        rel_dir: str,
        tree: Optional[HierarchyNode] = None,
        config: Optional[Dict[str, Any]] = None,
) -> Optional[LogicalPath]:
    """
    Resolve a root-relative directory to the instance it builds.

    Equivalent to resolving the ``init`` file inside the directory.
    """
    cfg = config or get_default_config()
    return _resolve_parts(_split_dir(rel_dir.replace("\\", "/")), None, tree, cfg)


def resolve_project_path(
        rel_path: str,
        root_path: str,
        config: Optional[Dict[str, Any]] = None,
        *,
        is_directory: bool = False,
) -> Optional[LogicalPath]:
    """
    Resolve a path against the project document found in ``root_path``.

    The document is read on every call so edits to it are always observed.

    Args:
        rel_path: Path relative to ``root_path``.
        root_path: Absolute project root.
        config: Optional validated configuration.
        is_directory: Resolve ``rel_path`` as a directory.

    Returns:
        Optional[LogicalPath]: The logical path, or None.
    """
    cfg = config or get_default_config()
    tree = load_hierarchy_tree(root_path, cfg)
    if is_directory:
        return resolve_directory_path(rel_path, tree, cfg)
    return resolve_logical_path(rel_path, tree, cfg)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _split_dir(dir_name: str) -> List[str]:
    return [part for part in dir_name.split("/") if part and part != "."]


def _resolve_parts(
        dir_parts: List[str],
        leaf: Optional[str],
        tree: Optional[HierarchyNode],
        cfg: Dict[str, Any],
) -> Optional[LogicalPath]:
    """Build the logical path for a directory chain plus an optional leaf name."""
    tail = [leaf] if leaf else []

    if tree is not None:
        matched: Optional[List[str]] = None
        remaining: List[str] = []

        # Longest directory prefix first, down to the project root itself
        for i in range(len(dir_parts), -1, -1):
            test_path = "/".join(dir_parts[:i])
            tree_path = find_path_in_tree(tree, test_path)
            if tree_path is not None:
                matched = tree_path
                remaining = dir_parts[i:]
                logger.debug(f"Tree match for '{test_path}': {matched}, remaining: {remaining}")
                break

        if matched:
            result = LogicalPath(matched[0], tuple(matched[1:] + remaining + tail))
            logger.debug(f"Resolved from tree: {result}")
            return result

        logger.debug("No matching path found in tree, falling back to default behavior")

    parts = list(dir_parts)
    source_root = cfg.get("source_root", DEFAULT_SOURCE_ROOT)
    if parts and source_root and parts[0] == source_root:
        parts.pop(0)

    if not parts:
        logger.debug(f"No service directory in {dir_parts}; path cannot be resolved")
        return None

    result = LogicalPath(parts[0], tuple(parts[1:] + tail))
    logger.debug(f"Resolved by fallback: {result}")
    return result
