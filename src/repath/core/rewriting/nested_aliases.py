from __future__ import annotations

"""
Nested Alias Reconciliation.

Second pass over a text after the primary rewrite. Handles references
made through aliases bound below the service level:

    local Shared = game:GetService("ReplicatedStorage").Shared
    local Util = require(Shared.Util)

Moving ``Shared/Util.lua`` to ``Shared/Lib/Util.lua`` turns the second line
into ``require(Shared.Lib.Util)``. Aliases are matched by the longest
segment prefix, most specific first.
"""

import logging
from typing import List, Optional, Tuple

from repath.core.rewriting.alias_index import build_alias_index
from repath.core.rewriting.occurrences import contains_reference, replace_reference
from repath.core.rewriting.reference_rewriter import PathLike, coerce_path
from repath.domain.path_models import (
    DEFAULT_GRAMMAR,
    LogicalPath,
    ReferenceGrammar,
    common_prefix_length,
    render_segments,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def reconcile_nested_aliases(
        text: str,
        old_path: PathLike,
        new_path: PathLike,
        grammar: ReferenceGrammar = DEFAULT_GRAMMAR,
) -> str:
    """
    Rewrite alias-relative references to ``old_path``.

    Args:
        text: Source text (already through the primary rewrite).
        old_path: Logical path before the move.
        new_path: Logical path after the move.
        grammar: Reference grammar of the project.

    Returns:
        str: The rewritten text (unchanged if nothing matched).
    """
    old = coerce_path(old_path, grammar)
    new = coerce_path(new_path, grammar)
    if old is None or new is None:
        return text

    index = build_alias_index(text, grammar)
    if not index:
        return text

    new_form = _best_new_form(index, new, grammar)

    candidates: List[Tuple[str, int, Tuple[str, ...]]] = []
    for name, path in index.items():
        prefix = common_prefix_length(path.parts, old.parts)
        # The alias must denote an ancestor of the moved unit
        if prefix == len(path.parts) and prefix < len(old.parts):
            candidates.append((name, prefix, old.parts[prefix:]))

    # Most specific first; sort is stable so ties keep discovery order
    candidates.sort(key=lambda c: c[1], reverse=True)

    for name, _prefix, suffix in candidates:
        literal = name + render_segments(suffix)
        if literal == new_form or not contains_reference(text, literal, new_form):
            continue
        text, count = replace_reference(text, literal, new_form)
        logger.debug(f"Nested alias: replaced {count} occurrence(s) of {literal} with {new_form}")

    return text


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _best_new_form(index, new: LogicalPath, grammar: ReferenceGrammar) -> str:
    """Spell the new path through the deepest alias that is one of its ancestors."""
    best_alias: Optional[str] = None
    best_length = 0

    for name, path in index.items():
        prefix = common_prefix_length(path.parts, new.parts)
        if prefix == len(path.parts) and prefix > best_length:
            best_alias = name
            best_length = prefix

    if best_alias is None:
        return new.render(grammar)
    return best_alias + render_segments(new.parts[best_length:])
