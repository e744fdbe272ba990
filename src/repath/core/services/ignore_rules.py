from __future__ import annotations

"""
Ignore-List Evaluation.

Parses the project's ``.repathignore`` document (gitignore syntax) plus the
built-in exclusions and answers whether a root-relative path is excluded
from rewriting. Patterns are matched segment by segment with ``fnmatch``
so ``*`` never crosses a directory boundary.

Supported syntax: blank lines and ``#`` comments are skipped, ``!``
re-includes, a trailing ``/`` restricts the pattern to directories, a
leading or inner ``/`` anchors the pattern to the root, ``**`` spans any
number of directories.
"""

import logging
import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from repath.domain.constants import DEFAULT_IGNORES, IGNORE_FILE_NAME

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# RULE MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class IgnoreRule:
    """One parsed ignore pattern."""
    pattern: str
    segments: Tuple[str, ...]
    anchored: bool
    dir_only: bool
    negated: bool

    def matches(self, parts: Sequence[str], is_dir: bool) -> bool:
        """Check the rule against one path (given as its segments)."""
        if self.dir_only and not is_dir:
            return False
        if self.anchored:
            return _match_segments(self.segments, parts)
        return fnmatchcase(parts[-1], self.segments[0])


def parse_ignore_line(line: str) -> Optional[IgnoreRule]:
    """
    Translate one line of gitignore syntax into a rule.

    Args:
        line: Raw line from the ignore document.

    Returns:
        Optional[IgnoreRule]: The rule, or None for blanks and comments.
    """
    raw = line.rstrip("\r\n").rstrip()
    if not raw or raw.startswith("#"):
        return None

    negated = raw.startswith("!")
    body = raw[1:] if negated else raw
    if body.startswith("\\"):
        body = body[1:]

    dir_only = body.endswith("/")
    body = body.rstrip("/")
    anchored = "/" in body
    body = body.lstrip("/")
    if not body:
        return None

    return IgnoreRule(
        pattern=raw,
        segments=tuple(s for s in body.split("/") if s),
        anchored=anchored,
        dir_only=dir_only,
        negated=negated,
    )


# -----------------------------------------------------------------------------
# IGNORE SET
# -----------------------------------------------------------------------------

class IgnoreSet:
    """
    Ordered collection of ignore rules; the last matching rule wins.

    A path whose parent directory is excluded stays excluded, as in git.
    """

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self._rules: List[IgnoreRule] = []
        if patterns:
            self.add(patterns)

    @property
    def rules(self) -> List[IgnoreRule]:
        return list(self._rules)

    def add(self, patterns: Iterable[str]) -> "IgnoreSet":
        """Append patterns (an iterable of lines or one multi-line string)."""
        if isinstance(patterns, str):
            patterns = patterns.splitlines()
        for line in patterns:
            rule = parse_ignore_line(line)
            if rule is not None:
                self._rules.append(rule)
        return self

    def ignores(self, rel_path: str, is_dir: bool = False) -> bool:
        """
        Decide whether a root-relative path is excluded.

        Args:
            rel_path: Posix or Windows path relative to the project root.
            is_dir: Whether the path itself is a directory.

        Returns:
            bool: True if the path must not be touched.
        """
        normalized = rel_path.replace("\\", "/")
        parts = [p for p in normalized.split("/") if p and p != "."]
        if not parts:
            return False

        for depth in range(1, len(parts) + 1):
            prefix = parts[:depth]
            prefix_is_dir = depth < len(parts) or is_dir
            excluded = self._evaluate(prefix, prefix_is_dir)
            if excluded and depth < len(parts):
                return True
            if depth == len(parts):
                return excluded
        return False

    def _evaluate(self, parts: Sequence[str], is_dir: bool) -> bool:
        excluded = False
        for rule in self._rules:
            if rule.matches(parts, is_dir):
                excluded = not rule.negated
        return excluded


# -----------------------------------------------------------------------------
# DOCUMENT LOADING
# -----------------------------------------------------------------------------

def load_ignore_set(root_path: str, config: Optional[Dict[str, Any]] = None) -> IgnoreSet:
    """
    Build the ignore set of a project.

    Built-in exclusions are always present; the ignore document is added
    when it exists and is readable.

    Args:
        root_path: Absolute project root.
        config: Optional validated configuration.

    Returns:
        IgnoreSet: The evaluated exclusion predicate.
    """
    cfg = config or {}
    ignore_set = IgnoreSet(cfg.get("default_ignores", DEFAULT_IGNORES))

    if not cfg.get("respect_ignore_file", True):
        return ignore_set

    file_name = cfg.get("ignore_file") or IGNORE_FILE_NAME
    ignore_path = os.path.join(root_path, file_name)
    if not os.path.isfile(ignore_path):
        logger.debug(f"No {file_name} in {root_path}")
        return ignore_set

    try:
        with open(ignore_path, "r", encoding="utf-8") as f:
            ignore_set.add(f.read())
        logger.debug(f"{file_name} loaded successfully")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"{file_name} is not readable: {e}")

    return ignore_set


def create_ignore_file(root_path: str, config: Optional[Dict[str, Any]] = None) -> bool:
    """
    Create an empty ignore document in the project root if absent.

    Args:
        root_path: Absolute project root.
        config: Optional validated configuration.

    Returns:
        bool: True if the file was created, False if it already existed.

    Raises:
        OSError: If the file cannot be created.
    """
    file_name = (config or {}).get("ignore_file") or IGNORE_FILE_NAME
    ignore_path = os.path.join(root_path, file_name)
    if os.path.exists(ignore_path):
        logger.info(f"{file_name} already exists")
        return False

    with open(ignore_path, "x", encoding="utf-8"):
        pass
    logger.info(f"Created {ignore_path}")
    return True


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _match_segments(pattern: Sequence[str], parts: Sequence[str]) -> bool:
    """Match path segments against pattern segments; ``**`` spans zero or more."""
    if not pattern:
        return not parts

    head = pattern[0]
    if head == "**":
        return any(_match_segments(pattern[1:], parts[i:]) for i in range(len(parts) + 1))

    if not parts:
        return False
    return fnmatchcase(parts[0], head) and _match_segments(pattern[1:], parts[1:])
