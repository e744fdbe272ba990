from __future__ import annotations

"""
Refactor Pipeline Data Models.

Defines the data structures and factory functions used to communicate
batch results between the refactor engine and the interface layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from repath.domain.path_models import FileMovement, SkippedMove

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEdit:
    """
    A full-text replacement staged for one file.

    Attributes:
        rel_path: Root-relative posix path (the file identifier).
        abs_path: Absolute filesystem path.
        original_text: Content read before rewriting (the replaced range).
        new_text: Replacement content.
    """
    rel_path: str
    abs_path: str
    original_text: str
    new_text: str


@dataclass(frozen=True)
class RefactorResult:
    """
    Unified result of one batch of moves.

    Attributes:
        ok: False only when the edit transaction could not be applied.
        error: Descriptive message in case of failure.
        root_path: Normalized project root.
        movements: Movements resolved from the batch.
        skipped_moves: Filesystem moves that produced no movement.
        changed_files: Root-relative paths whose text changed.
        files_scanned: Number of candidate files read.
        dry_run: Whether the transaction was withheld on purpose.
        applied: Whether edits were written to disk.
        summary: Extra counters for the interface layer.
    """
    ok: bool
    error: str
    root_path: str

    movements: List[FileMovement] = field(default_factory=list)
    skipped_moves: List[SkippedMove] = field(default_factory=list)
    changed_files: List[str] = field(default_factory=list)
    files_scanned: int = 0

    dry_run: bool = False
    applied: bool = False

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        root_path: str,
        movements: Optional[List[FileMovement]] = None,
        skipped_moves: Optional[List[SkippedMove]] = None,
        changed_files: Optional[List[str]] = None,
        files_scanned: int = 0,
) -> RefactorResult:
    """
    Create a failed batch result.

    Args:
        error: Detailed error description.
        root_path: Project root the batch ran against.
        movements: Movements that were attempted.
        skipped_moves: Moves skipped during resolution.
        changed_files: Files whose edits were lost.
        files_scanned: Number of candidate files read.

    Returns:
        RefactorResult: An immutable error result object.
    """
    return RefactorResult(
        ok=False,
        error=error,
        root_path=root_path,
        movements=movements or [],
        skipped_moves=skipped_moves or [],
        changed_files=changed_files or [],
        files_scanned=files_scanned,
        applied=False,
    )


def create_success_result(
        root_path: str,
        movements: List[FileMovement],
        skipped_moves: List[SkippedMove],
        changed_files: List[str],
        files_scanned: int,
        dry_run: bool = False,
) -> RefactorResult:
    """
    Create a successful batch result.

    Args:
        root_path: Project root the batch ran against.
        movements: Movements that were applied.
        skipped_moves: Moves skipped during resolution.
        changed_files: Files whose text changed.
        files_scanned: Number of candidate files read.
        dry_run: True if edits were computed but not written.

    Returns:
        RefactorResult: An immutable success result object.
    """
    return RefactorResult(
        ok=True,
        error="",
        root_path=root_path,
        movements=movements,
        skipped_moves=skipped_moves,
        changed_files=changed_files,
        files_scanned=files_scanned,
        dry_run=dry_run,
        applied=bool(changed_files) and not dry_run,
        summary={
            "moves": len(movements),
            "skipped": len(skipped_moves),
            "changed": len(changed_files),
            "scanned": files_scanned,
        },
    )
