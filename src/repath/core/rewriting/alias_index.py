from __future__ import annotations

"""
Local Alias Discovery.

Scans one Luau source text for ``local NAME = EXPR`` declarations whose
expression denotes a DataModel location, either directly
(``game:GetService("X").A``) or through one previously declared alias
(``Shared.Util`` where ``Shared`` is already known).

Only one level of indirection is followed; an alias defined through a
chain of several other aliases resolves against the already-resolved
value of its immediate head, in file order.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from repath.domain.path_models import (
    DEFAULT_GRAMMAR,
    LogicalPath,
    ReferenceGrammar,
    parse_segments,
)

logger = logging.getLogger(__name__)

AliasIndex = Mapping[str, LogicalPath]

# `Head.Child["Some Child"]`: an alias head followed by accessor steps
_ALIAS_REFERENCE_RX = re.compile(
    r'^([A-Za-z_][A-Za-z0-9_]*)((?:\.[A-Za-z_][A-Za-z0-9_]*|\["[^"]*"\])*)$'
)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def build_alias_index(text: str, grammar: ReferenceGrammar = DEFAULT_GRAMMAR) -> AliasIndex:
    """
    Build the alias -> logical path mapping of one file.

    Args:
        text: Full source text.
        grammar: Reference grammar of the project.

    Returns:
        AliasIndex: Read-only mapping in discovery order.
    """
    declaration_rx = _declaration_rx(grammar.alias_keyword)
    index: Dict[str, LogicalPath] = {}

    for line in text.splitlines():
        m = declaration_rx.match(line)
        if not m:
            continue

        name = m.group(1)
        expr = strip_declaration_expr(m.group(2))
        resolved = _resolve_expr(expr, index, grammar)
        if resolved is not None:
            index[name] = resolved

    if index:
        logger.debug(f"Alias index: {', '.join(f'{k}={v.render(grammar)}' for k, v in index.items())}")
    return MappingProxyType(index)


def find_anchor_alias(index: AliasIndex, anchor: str) -> Optional[str]:
    """
    Return the first alias bound to exactly the given service.

    Args:
        index: Alias index of the file.
        anchor: Service name.

    Returns:
        Optional[str]: Alias name, or None if the service is never aliased.
    """
    for name, path in index.items():
        if path.anchor == anchor and path.is_anchor:
            return name
    return None


def strip_declaration_expr(expr: str) -> str:
    """
    Drop a trailing ``--`` comment and ``;`` terminators from an expression.

    Comment markers inside string literals are kept.
    """
    quote: Optional[str] = None
    cut = len(expr)
    i = 0
    while i < len(expr):
        ch = expr[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif expr.startswith("--", i):
            cut = i
            break
        i += 1

    return expr[:cut].strip().rstrip(";").strip()


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _declaration_rx(keyword: str) -> re.Pattern:
    # Optional Luau type annotation between the name and '='
    return re.compile(
        rf"^\s*{re.escape(keyword)}\s+([A-Za-z_][A-Za-z0-9_]*)\s*(?::[^=]*)?=(?!=)\s*(.*)$"
    )


def _resolve_expr(expr: str, index: Mapping[str, LogicalPath], grammar: ReferenceGrammar) -> Optional[LogicalPath]:
    """Classify an alias expression: anchor access, alias-relative access, or neither."""
    direct = LogicalPath.parse(expr, grammar)
    if direct is not None:
        return direct

    m = _ALIAS_REFERENCE_RX.match(expr)
    if not m or m.group(1) not in index:
        return None

    segments = parse_segments(m.group(2))
    if segments is None:
        return None
    return index[m.group(1)].child(*segments)
