from __future__ import annotations

"""
Rojo Project Tree Loader.

Locates the ``*.project.json`` document in the project root, decodes its
``tree`` object into HierarchyNode values and answers "which tree node is
bound to this directory?" lookups. Every failure degrades to "no tree".
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from repath.domain.constants import PROJECT_FILE_SUFFIX
from repath.domain.tree_models import HierarchyNode

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def find_project_file(root_path: str, suffix: str = PROJECT_FILE_SUFFIX) -> Optional[str]:
    """
    Find the project document in the root directory.

    Args:
        root_path: Absolute path to the project root.
        suffix: Filename suffix identifying project documents.

    Returns:
        Optional[str]: Absolute path to the first match (sorted by name), or
                       None if the directory holds no project document.
    """
    try:
        names = sorted(os.listdir(root_path))
    except OSError as e:
        logger.error(f"Error reading workspace directory '{root_path}': {e}")
        return None

    for name in names:
        candidate = os.path.join(root_path, name)
        if name.endswith(suffix) and os.path.isfile(candidate):
            logger.debug(f"Found project file: {name}")
            return candidate

    logger.debug(f"No {suffix} file found in {root_path}")
    return None


def load_hierarchy_tree(root_path: str, config: Optional[Dict[str, Any]] = None) -> Optional[HierarchyNode]:
    """
    Load and decode the hierarchy tree of the project.

    Missing documents, unreadable files, invalid JSON and a missing or
    non-object ``tree`` property all yield None.

    Args:
        root_path: Absolute path to the project root.
        config: Optional configuration (for ``project_file_suffix``).

    Returns:
        Optional[HierarchyNode]: Root node of the tree, or None.
    """
    suffix = (config or {}).get("project_file_suffix") or PROJECT_FILE_SUFFIX
    project_file = find_project_file(root_path, suffix)
    if not project_file:
        return None

    try:
        with open(project_file, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to parse project file '{project_file}': {e}")
        return None

    tree = document.get("tree") if isinstance(document, dict) else None
    if not isinstance(tree, dict):
        logger.error(f"Invalid project file '{project_file}': missing tree property")
        return None

    logger.debug(f"Loaded hierarchy tree from {os.path.basename(project_file)}")
    return HierarchyNode.from_mapping(tree)


def find_path_in_tree(
        node: HierarchyNode,
        target_path: str,
        current_path: Optional[List[str]] = None,
) -> Optional[List[str]]:
    """
    Depth-first search for the node whose ``$path`` equals a directory.

    Args:
        node: Subtree to search.
        target_path: Root-relative posix directory ('' for the root).
        current_path: Instance names leading to ``node``.

    Returns:
        Optional[List[str]]: Instance names from the tree root to the match,
                             or None if no node is bound to the directory.
    """
    current_path = current_path or []

    if node.bound_path is not None and normalize_tree_path(node.bound_path) == target_path:
        return current_path

    for name, child in node.children.items():
        found = find_path_in_tree(child, target_path, current_path + [name])
        if found is not None:
            return found

    return None


def normalize_tree_path(path: str) -> str:
    """Bring a ``$path`` value to the root-relative posix form used for lookups."""
    p = path.replace("\\", "/").strip()
    while p.startswith("./"):
        p = p[2:]
    p = p.rstrip("/")
    return "" if p == "." else p
