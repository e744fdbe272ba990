from __future__ import annotations

"""
Logical Path Domain Models.

Defines the immutable value objects that describe locations in the Roblox
DataModel hierarchy (logical paths), the grammar used to spell them inside
Luau source, and the movement records produced when files are renamed.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from repath.domain.constants import (
    DEFAULT_ALIAS_KEYWORD,
    DEFAULT_ANCHOR_ACCESSOR,
    DEFAULT_DATAMODEL_ROOT,
)

IDENTIFIER_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# One accessor step: `.Name` or `["Display Name"]`
SEGMENT_RX = re.compile(r'\.([A-Za-z_][A-Za-z0-9_]*)|\["([^"]*)"\]')

# -----------------------------------------------------------------------------
# REFERENCE GRAMMAR
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ReferenceGrammar:
    """
    Textual grammar of anchor access and alias declarations.

    Attributes:
        root: Global that owns the anchors (``game``).
        accessor: Method that fetches an anchor by name (``GetService``).
        alias_keyword: Keyword that introduces a local alias (``local``).
    """
    root: str = DEFAULT_DATAMODEL_ROOT
    accessor: str = DEFAULT_ANCHOR_ACCESSOR
    alias_keyword: str = DEFAULT_ALIAS_KEYWORD

    def anchor_expr(self, anchor: str) -> str:
        """Spell the fully-qualified access expression for an anchor."""
        return f'{self.root}:{self.accessor}("{anchor}")'

    @property
    def anchor_rx(self) -> re.Pattern:
        """Pattern splitting a reference into (anchor name, remainder)."""
        return _compile_anchor_rx(self.root, self.accessor)


@lru_cache(maxsize=None)
def _compile_anchor_rx(root: str, accessor: str) -> re.Pattern:
    return re.compile(
        rf'^{re.escape(root)}:{re.escape(accessor)}\("([^"]+)"\)(.*)$',
        re.DOTALL,
    )


DEFAULT_GRAMMAR = ReferenceGrammar()

# -----------------------------------------------------------------------------
# SEGMENT HELPERS
# -----------------------------------------------------------------------------

def format_segment(name: str) -> str:
    """
    Render one hierarchy entry as an accessor step.

    Identifiers use dot notation; anything else (spaces, punctuation, a
    leading digit) uses bracket notation without a leading dot.

    Args:
        name: Raw entry name.

    Returns:
        str: ``.Name`` or ``["Display Name"]``; ``"2D"`` and ``"a-b"``
             are bracketed too (``["2D"]``, ``["a-b"]``), not only names
             with spaces.
    """
    if IDENTIFIER_RX.match(name):
        return f".{name}"
    return f'["{name}"]'


def render_segments(segments: Sequence[str]) -> str:
    """Concatenate accessor steps for a sequence of entry names."""
    return "".join(format_segment(s) for s in segments)


def parse_segments(text: str) -> Optional[Tuple[str, ...]]:
    """
    Split an accessor chain (``.A["B C"].D``) into entry names.

    Args:
        text: The chain, possibly empty.

    Returns:
        Optional[Tuple[str, ...]]: Entry names, or None if the text contains
        anything that is not an accessor step.
    """
    names = []
    pos = 0
    while pos < len(text):
        m = SEGMENT_RX.match(text, pos)
        if not m:
            return None
        names.append(m.group(1) if m.group(1) is not None else m.group(2))
        pos = m.end()
    return tuple(names)


def common_prefix_length(left: Sequence[str], right: Sequence[str]) -> int:
    """Count leading elements shared by two sequences."""
    count = 0
    for a, b in zip(left, right):
        if a != b:
            break
        count += 1
    return count

# -----------------------------------------------------------------------------
# CORE VALUE OBJECTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogicalPath:
    """
    A location in the DataModel, independent of the filesystem layout.

    Attributes:
        anchor: Top-level service name (always non-empty).
        segments: Entries below the anchor. Empty means the anchor itself.
    """
    anchor: str
    segments: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.anchor:
            raise ValueError("LogicalPath anchor must be non-empty.")
        object.__setattr__(self, "segments", tuple(self.segments))

    @classmethod
    def parse(cls, text: str, grammar: ReferenceGrammar = DEFAULT_GRAMMAR) -> Optional["LogicalPath"]:
        """
        Parse an anchor-grammar expression.

        Args:
            text: Expression such as ``game:GetService("X").A.B``.
            grammar: Grammar the expression is written in.

        Returns:
            Optional[LogicalPath]: The path, or None if the text does not
            follow the anchor grammar.
        """
        m = grammar.anchor_rx.match(text.strip())
        if not m:
            return None
        segments = parse_segments(m.group(2))
        if segments is None:
            return None
        return cls(m.group(1), segments)

    @property
    def is_anchor(self) -> bool:
        return not self.segments

    @property
    def parts(self) -> Tuple[str, ...]:
        """Anchor followed by every segment, for prefix comparisons."""
        return (self.anchor,) + self.segments

    def suffix(self) -> str:
        """Accessor chain below the anchor (empty for the anchor itself)."""
        return render_segments(self.segments)

    def render(self, grammar: ReferenceGrammar = DEFAULT_GRAMMAR) -> str:
        return grammar.anchor_expr(self.anchor) + self.suffix()

    def child(self, *names: str) -> "LogicalPath":
        return LogicalPath(self.anchor, self.segments + tuple(names))

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class FileMovement:
    """
    One rename/move event translated into logical space.

    Attributes:
        old_path: Logical path before the move.
        new_path: Logical path after the move.
        old_rel_path: Root-relative filesystem path before the move.
        new_rel_path: Root-relative filesystem path after the move.
    """
    old_path: LogicalPath
    new_path: LogicalPath
    old_rel_path: str = ""
    new_rel_path: str = ""


@dataclass(frozen=True)
class SkippedMove:
    """A filesystem move that produced no FileMovement, and why."""
    old_rel_path: str
    new_rel_path: str
    reason: str

# -----------------------------------------------------------------------------
# REWRITE OUTCOMES
# -----------------------------------------------------------------------------

class RewriteStatus(str, Enum):
    APPLIED = "applied"
    NO_MATCH = "no_match"
    MALFORMED = "malformed"
    ANCHOR_ONLY = "anchor_only"


@dataclass(frozen=True)
class RewriteOutcome:
    """Result of applying one movement to one text."""
    text: str
    status: RewriteStatus
    replacements: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def applied(self) -> bool:
        return self.status is RewriteStatus.APPLIED
