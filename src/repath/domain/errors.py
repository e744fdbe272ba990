from __future__ import annotations

"""
Domain Exception Hierarchy.

The rewrite core reports per-file and per-move problems as status values;
exceptions are reserved for the command layer (filesystem moves requested
by the user).
"""


class RepathError(Exception):
    """Base class for errors raised by RePath."""


class MoveError(RepathError):
    """A requested filesystem move cannot be performed."""
