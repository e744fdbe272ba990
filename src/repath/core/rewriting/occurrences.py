from __future__ import annotations

"""
Token-Bounded Literal Matching.

Reference forms are searched and substituted as literal strings, but only
where they stand as a whole accessor chain: ``SSS.Old`` matches in
``require(SSS.Old)`` and ``SSS.Old.Child``, never inside ``SSS.OldTwo``
or ``Other.SSS.Old``.

When the replacement extends the literal (``SSS.Util`` to
``SSS.Util.Core``), occurrences already spelled as the replacement are
left alone, so a second pass over rewritten text changes nothing.
"""

import re
from functools import lru_cache
from typing import Tuple

_IDENT_CHARS = "A-Za-z0-9_"


@lru_cache(maxsize=256)
def _occurrence_rx(literal: str, rewritten_tail: str = "") -> re.Pattern:
    pattern = rf"(?<![{_IDENT_CHARS}.]){re.escape(literal)}(?![{_IDENT_CHARS}])"
    if rewritten_tail:
        pattern += rf"(?!{re.escape(rewritten_tail)}(?![{_IDENT_CHARS}]))"
    return re.compile(pattern)


def _tail_of(literal: str, replacement: str) -> str:
    if replacement and replacement != literal and replacement.startswith(literal):
        return replacement[len(literal):]
    return ""


def contains_reference(text: str, literal: str, replacement: str = "") -> bool:
    """
    Check whether ``literal`` occurs in ``text`` as a whole reference.

    With ``replacement``, occurrences that already read as the replacement
    do not count.
    """
    if not literal:
        return False
    return _occurrence_rx(literal, _tail_of(literal, replacement)).search(text) is not None


def replace_reference(text: str, literal: str, replacement: str) -> Tuple[str, int]:
    """
    Replace every whole-reference occurrence of ``literal``.

    Returns:
        Tuple[str, int]: New text and number of substitutions.
    """
    if not literal:
        return text, 0
    rx = _occurrence_rx(literal, _tail_of(literal, replacement))
    return rx.subn(lambda _m: replacement, text)
