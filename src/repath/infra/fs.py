from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, root-relative posix conversion and the
read/write primitives used by the refactor engine. Source files are read
and written with ``newline=""`` so original line endings survive a rewrite.
"""

import os
import shutil
from typing import Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def to_posix_relative(path: str, root_path: str) -> str:
    """
    Express a path relative to the project root with forward slashes.

    Relative inputs are taken as already relative to the root.

    Args:
        path: Absolute or root-relative path.
        root_path: Absolute project root.

    Returns:
        str: Posix-style relative path ('' for the root itself).
    """
    absolute = path if os.path.isabs(path) else os.path.join(root_path, path)
    rel = os.path.relpath(os.path.abspath(absolute), os.path.abspath(root_path))
    rel = rel.replace(os.sep, "/")
    return "" if rel == "." else rel


def is_within_root(path: str, root_path: str) -> bool:
    """Check that a path does not escape the project root."""
    rel = to_posix_relative(path, root_path)
    return rel != ".." and not rel.startswith("../")

# -----------------------------------------------------------------------------
# FILE I/O API
# -----------------------------------------------------------------------------

def read_text_file(file_path: str) -> str:
    """
    Read a source file verbatim.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with open(file_path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text_file(file_path: str, content: str) -> None:
    """Write a source file verbatim (no newline translation)."""
    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def move_path(source: str, destination: str) -> None:
    """
    Move a file or directory, creating the destination's parent folders.

    Raises:
        OSError: If the move fails.
    """
    parent = os.path.dirname(os.path.abspath(destination))
    if parent:
        os.makedirs(parent, exist_ok=True)
    shutil.move(source, destination)
