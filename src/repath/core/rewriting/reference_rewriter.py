from __future__ import annotations

"""
Primary Reference Rewriter.

Rewrites the references of one moved module inside one source text. Two
spellings of the old path are recognized:

1. Through a service alias:   ``local SSS = game:GetService("ServerScriptService")``
                              ``require(SSS.OldModule)``
2. Fully qualified:           ``require(game:GetService("ServerScriptService").OldModule)``

The replacement reuses an alias bound to the new service when the file
declares one, and spells the new path out in full otherwise. No alias is
ever introduced.
"""

import logging
from typing import List, Optional, Tuple, Union

from repath.core.rewriting.alias_index import build_alias_index, find_anchor_alias
from repath.core.rewriting.occurrences import contains_reference, replace_reference
from repath.domain.path_models import (
    DEFAULT_GRAMMAR,
    LogicalPath,
    ReferenceGrammar,
    RewriteOutcome,
    RewriteStatus,
)

logger = logging.getLogger(__name__)

PathLike = Union[LogicalPath, str]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def rewrite_references(
        text: str,
        old_path: PathLike,
        new_path: PathLike,
        grammar: ReferenceGrammar = DEFAULT_GRAMMAR,
) -> RewriteOutcome:
    """
    Replace every reference to ``old_path`` with the best form of ``new_path``.

    The alias-qualified form is handled first, then any remaining
    fully-qualified occurrences. All occurrences are replaced.

    Args:
        text: Source text.
        old_path: Logical path before the move (object or string).
        new_path: Logical path after the move (object or string).
        grammar: Reference grammar of the project.

    Returns:
        RewriteOutcome: The (possibly unchanged) text and a status tag.
    """
    old = coerce_path(old_path, grammar)
    new = coerce_path(new_path, grammar)

    if old is None or new is None:
        logger.error(f"Path is not in correct format: {old_path!r} -> {new_path!r}")
        return RewriteOutcome(text, RewriteStatus.MALFORMED)

    if old.is_anchor:
        logger.warning(f"Refusing to rewrite bare service reference {old.render(grammar)}")
        return RewriteOutcome(text, RewriteStatus.ANCHOR_ONLY)

    index = build_alias_index(text, grammar)
    old_alias = find_anchor_alias(index, old.anchor)
    new_alias = find_anchor_alias(index, new.anchor)

    forms: List[str] = []
    if old_alias:
        forms.append(old_alias + old.suffix())
    forms.append(old.render(grammar))

    replacement = choose_new_form(new, old_alias, new_alias, grammar)
    replacements: List[Tuple[str, str]] = []
    current = text
    for literal in forms:
        if not contains_reference(current, literal, replacement):
            continue

        current, count = replace_reference(current, literal, replacement)
        replacements.append((literal, replacement))
        logger.debug(f"Replaced {count} occurrence(s) of {literal} with {replacement}")

    if not replacements:
        logger.debug(f"No reference to {old.render(grammar)} found")
        return RewriteOutcome(text, RewriteStatus.NO_MATCH)

    return RewriteOutcome(current, RewriteStatus.APPLIED, tuple(replacements))


def choose_new_form(
        new: LogicalPath,
        old_alias: Optional[str],
        new_alias: Optional[str],
        grammar: ReferenceGrammar = DEFAULT_GRAMMAR,
) -> str:
    """
    Pick the spelling of the new path.

    - Same service alias on both sides: keep it, change only the suffix.
    - A different alias bound to the new service: switch to it.
    - No alias for the new service: inline the full access expression.
    """
    if old_alias is not None and old_alias == new_alias:
        return old_alias + new.suffix()
    if new_alias is not None:
        return new_alias + new.suffix()
    return new.render(grammar)


def coerce_path(value: PathLike, grammar: ReferenceGrammar = DEFAULT_GRAMMAR) -> Optional[LogicalPath]:
    """Accept a LogicalPath or its textual form."""
    if isinstance(value, LogicalPath):
        return value
    if isinstance(value, str):
        return LogicalPath.parse(value, grammar)
    return None
