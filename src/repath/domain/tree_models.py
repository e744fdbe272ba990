from __future__ import annotations

"""
Hierarchy Tree Data Models.

Provides the recursive node type mirroring the ``tree`` object of a Rojo
project document. Nodes are read-only; they are rebuilt every time the
document is loaded.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HierarchyNode:
    """
    One instance in the project tree.

    Attributes:
        bound_path: Filesystem directory declared through ``$path`` (if any).
        children: Named child instances, in document order.
    """
    bound_path: Optional[str] = None
    children: Dict[str, "HierarchyNode"] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "HierarchyNode":
        """
        Build a node (and its subtree) from a decoded JSON object.

        Keys starting with ``$`` are properties, not children; non-object
        values are ignored.

        Args:
            data: Decoded ``tree`` object or one of its descendants.

        Returns:
            HierarchyNode: The constructed subtree.
        """
        raw_path = data.get("$path")
        bound_path = raw_path if isinstance(raw_path, str) else None

        children: Dict[str, HierarchyNode] = {}
        for key, value in data.items():
            if key.startswith("$"):
                continue
            if isinstance(value, Mapping):
                children[key] = cls.from_mapping(value)

        return cls(bound_path=bound_path, children=children)
