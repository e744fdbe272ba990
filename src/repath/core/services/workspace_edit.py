from __future__ import annotations

"""
Workspace Edit Transaction.

Accumulates one full-text replacement per file and applies them as a
single all-or-nothing unit:

1. Verify every file still holds the text the edit was computed from.
2. Write each replacement to a temporary sibling file.
3. Swap the temporaries into place with ``os.replace``.

Any failure before the swap removes the temporaries; a failure during the
swap restores the files already replaced.
"""

import logging
import os
from typing import Dict, List, Tuple

from repath.domain.pipeline_models import FileEdit
from repath.infra.fs import read_text_file, write_text_file

logger = logging.getLogger(__name__)

_TEMP_SUFFIX = ".repath-tmp"


class WorkspaceEdit:
    """Write-only collection of staged file edits, submitted once."""

    def __init__(self) -> None:
        self._entries: Dict[str, FileEdit] = {}
        self.error: str = ""

    def stage(self, edit: FileEdit) -> None:
        """
        Stage a replacement for one file.

        Raises:
            ValueError: If the file already has a staged entry.
        """
        if edit.abs_path in self._entries:
            raise ValueError(f"File already staged: {edit.rel_path}")
        self._entries[edit.abs_path] = edit

    @property
    def entries(self) -> List[FileEdit]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def apply(self) -> bool:
        """
        Apply every staged edit, or none of them.

        Returns:
            bool: True if all files were written. On failure ``error``
                  describes the cause and no file is left modified.
        """
        if not self._entries:
            return True

        temps: List[Tuple[FileEdit, str]] = []
        try:
            for edit in self._entries.values():
                current = read_text_file(edit.abs_path)
                if current != edit.original_text:
                    raise RuntimeError(f"{edit.rel_path} changed since it was read")

                temp_path = edit.abs_path + _TEMP_SUFFIX
                write_text_file(temp_path, edit.new_text)
                temps.append((edit, temp_path))
        except (OSError, UnicodeDecodeError, RuntimeError) as e:
            self.error = str(e)
            logger.error(f"Edit transaction aborted before commit: {e}")
            _remove_temps(temps)
            return False

        swapped: List[FileEdit] = []
        try:
            for edit, temp_path in temps:
                os.replace(temp_path, edit.abs_path)
                swapped.append(edit)
        except OSError as e:
            self.error = str(e)
            logger.error(f"Edit transaction failed during commit: {e}. Rolling back.")
            _remove_temps(temps[len(swapped):])
            _restore(swapped)
            return False

        logger.debug(f"Edit transaction applied to {len(swapped)} file(s)")
        return True


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _remove_temps(temps: List[Tuple[FileEdit, str]]) -> None:
    for _edit, temp_path in temps:
        try:
            if os.path.exists(temp_path):
                os.remove(temp_path)
        except OSError as e:
            logger.warning(f"Could not remove temporary file '{temp_path}': {e}")


def _restore(edits: List[FileEdit]) -> None:
    for edit in edits:
        try:
            write_text_file(edit.abs_path, edit.original_text)
        except OSError as e:
            logger.critical(f"Rollback failed for {edit.rel_path}: {e}")
