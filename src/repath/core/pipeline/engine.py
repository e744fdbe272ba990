from __future__ import annotations

"""
Core refactor pipeline.

This module coordinates the reference update after files were moved:
1. Validates configuration and the project root.
2. Translates filesystem moves into logical movements.
3. Loads the ignore set and enumerates candidate source files.
4. Folds every movement over each file's text (primary + nested pass).
5. Stages one edit per changed file and submits the transaction once.
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from repath.core.pipeline.validator import validate_config
from repath.core.resolution.path_resolver import resolve_project_path
from repath.core.rewriting.nested_aliases import reconcile_nested_aliases
from repath.core.rewriting.reference_rewriter import rewrite_references
from repath.core.services.ignore_rules import load_ignore_set
from repath.core.services.scanner import yield_candidate_files
from repath.core.services.workspace_edit import WorkspaceEdit
from repath.domain.config import grammar_from_config
from repath.domain.errors import MoveError
from repath.domain.path_models import (
    DEFAULT_GRAMMAR,
    FileMovement,
    ReferenceGrammar,
    RewriteStatus,
    SkippedMove,
)
from repath.domain.pipeline_models import (
    FileEdit,
    RefactorResult,
    create_error_result,
    create_success_result,
)
from repath.infra.fs import (
    is_within_root,
    move_path,
    normalize_path,
    read_text_file,
    to_posix_relative,
)

logger = logging.getLogger(__name__)

MovePair = Tuple[str, str]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def run_refactor(
        pairs: Sequence[MovePair],
        config: Optional[Dict[str, Any]] = None,
        *,
        dry_run: bool = False,
) -> RefactorResult:
    """
    Update references for a batch of filesystem moves that already happened.

    Args:
        pairs: Ordered (old path, new path) pairs, absolute or root-relative.
        config: Raw configuration (validated here).
        dry_run: Compute edits without writing them.

    Returns:
        RefactorResult: Batch outcome.
    """
    cfg, warnings = validate_config(config or {})
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    root_path = normalize_path(cfg.get("root_path"), os.getcwd())
    if not os.path.isdir(root_path):
        msg = f"Invalid project root: {root_path}"
        logger.error(msg)
        return create_error_result(msg, root_path)

    movements, skipped = build_movements(pairs, root_path, cfg)
    return refactor_workspace(movements, cfg, dry_run=dry_run, skipped_moves=skipped)


def move_and_refactor(
        source: str,
        destination: str,
        config: Optional[Dict[str, Any]] = None,
        *,
        dry_run: bool = False,
) -> RefactorResult:
    """
    Move a file or directory on disk, then update references to it.

    With ``dry_run`` nothing is moved and no file is written.

    Raises:
        MoveError: If the source is missing, the destination exists, or
                   either lies outside the project root.
    """
    cfg, _ = validate_config(config or {})
    root_path = normalize_path(cfg.get("root_path"), os.getcwd())
    src_abs = os.path.abspath(source if os.path.isabs(source) else os.path.join(root_path, source))
    dst_abs = os.path.abspath(destination if os.path.isabs(destination) else os.path.join(root_path, destination))

    if not os.path.exists(src_abs):
        raise MoveError(f"Source does not exist: {src_abs}")
    if os.path.exists(dst_abs):
        raise MoveError(f"Destination already exists: {dst_abs}")
    if not (is_within_root(src_abs, root_path) and is_within_root(dst_abs, root_path)):
        raise MoveError(f"Move must stay inside the project root: {root_path}")

    if not dry_run:
        try:
            move_path(src_abs, dst_abs)
        except OSError as e:
            raise MoveError(f"Could not move '{src_abs}' to '{dst_abs}': {e}") from e
        logger.info(f"Moved {to_posix_relative(src_abs, root_path)} -> {to_posix_relative(dst_abs, root_path)}")

    return run_refactor([(src_abs, dst_abs)], cfg, dry_run=dry_run)


def build_movements(
        pairs: Iterable[MovePair],
        root_path: str,
        config: Dict[str, Any],
) -> Tuple[List[FileMovement], List[SkippedMove]]:
    """
    Translate filesystem moves into logical movements.

    Non-source files are ignored, directories are expanded into one
    movement per source file they contain, and moves that cannot be
    resolved (or resolve to the same logical path) are recorded as skipped.

    Args:
        pairs: Ordered (old path, new path) pairs.
        root_path: Absolute project root.
        config: Validated configuration.

    Returns:
        Tuple[List[FileMovement], List[SkippedMove]]: Movements and skips.
    """
    movements: List[FileMovement] = []
    skipped: List[SkippedMove] = []
    extensions = config.get("extensions", [])

    for old, new in pairs:
        old_rel = to_posix_relative(old, root_path)
        new_rel = to_posix_relative(new, root_path)

        if not (is_within_root(old, root_path) and is_within_root(new, root_path)):
            logger.warning(f"Not within the workspace folder: {old} -> {new}")
            skipped.append(SkippedMove(old_rel, new_rel, "outside_root"))
            continue

        for file_old, file_new in _expand_pair(old_rel, new_rel, root_path, extensions):
            movement, skip = _resolve_movement(file_old, file_new, root_path, config)
            if movement is not None:
                movements.append(movement)
            elif skip is not None:
                skipped.append(skip)

    return movements, skipped


def rewrite_text(
        text: str,
        movements: Sequence[FileMovement],
        grammar: ReferenceGrammar = DEFAULT_GRAMMAR,
) -> str:
    """
    Apply movements to one text, in order, each seeing the previous output.

    Args:
        text: Original source text.
        movements: Ordered movements of the batch.
        grammar: Reference grammar of the project.

    Returns:
        str: Rewritten text (identical to the input if nothing matched).
    """
    current = text
    for movement in movements:
        outcome = rewrite_references(current, movement.old_path, movement.new_path, grammar)
        if outcome.status is RewriteStatus.MALFORMED:
            logger.error(f"Skipping malformed movement {movement.old_rel_path} -> {movement.new_rel_path}")
        current = reconcile_nested_aliases(outcome.text, movement.old_path, movement.new_path, grammar)
    return current


def refactor_workspace(
        movements: Sequence[FileMovement],
        config: Dict[str, Any],
        *,
        dry_run: bool = False,
        skipped_moves: Sequence[SkippedMove] = (),
) -> RefactorResult:
    """
    Rewrite every candidate file of the project for the given movements.

    An empty movement list reads no file and stages no edit.

    Args:
        movements: Ordered logical movements.
        config: Validated configuration.
        dry_run: Compute edits without writing them.
        skipped_moves: Skips from resolution, carried into the result.

    Returns:
        RefactorResult: Batch outcome.
    """
    root_path = normalize_path(config.get("root_path"), os.getcwd())
    movements = list(movements)
    skipped = list(skipped_moves)

    if not movements:
        logger.info("No movement to apply.")
        return create_success_result(root_path, movements, skipped, [], 0, dry_run)

    for movement in movements:
        logger.info(f"Refactor: {movement.old_path} -> {movement.new_path}")

    grammar = grammar_from_config(config)
    ignore_set = load_ignore_set(root_path, config)
    edit = WorkspaceEdit()
    scanned = 0

    for entry in yield_candidate_files(root_path, config.get("extensions", []), ignore_set):
        logger.debug(f"Looking at file {entry['rel_path']}")
        try:
            text = read_text_file(entry["file_path"])
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {entry['rel_path']}: {e}")
            continue

        scanned += 1
        new_text = rewrite_text(text, movements, grammar)
        if new_text != text:
            edit.stage(FileEdit(entry["rel_path"], entry["file_path"], text, new_text))
            logger.info(f"Updated references in {entry['rel_path']}")

    changed = [e.rel_path for e in edit.entries]

    if changed and not dry_run and not edit.apply():
        msg = f"Couldn't refactor the paths: {edit.error}"
        return create_error_result(msg, root_path, movements, skipped, changed, scanned)

    return create_success_result(root_path, movements, skipped, changed, scanned, dry_run)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_source(rel_path: str, extensions: Sequence[str]) -> bool:
    return rel_path.lower().endswith(tuple(e.lower() for e in extensions))


def _expand_pair(
        old_rel: str,
        new_rel: str,
        root_path: str,
        extensions: Sequence[str],
) -> List[MovePair]:
    """Turn one move into per-file moves (a directory yields its source files)."""
    # After a real move the directory sits at the new location; on a dry run, at the old one
    for candidate in (new_rel, old_rel):
        base = os.path.join(root_path, candidate)
        if candidate and os.path.isdir(base):
            pairs: List[MovePair] = []
            for root, dirs, files in os.walk(base):
                dirs.sort()
                for file_name in sorted(files):
                    sub = to_posix_relative(os.path.join(root, file_name), base)
                    if _is_source(sub, extensions):
                        pairs.append((f"{old_rel}/{sub}", f"{new_rel}/{sub}"))
            return pairs

    if not _is_source(old_rel, extensions):
        return []
    return [(old_rel, new_rel)]


def _resolve_movement(
        old_rel: str,
        new_rel: str,
        root_path: str,
        config: Dict[str, Any],
) -> Tuple[Optional[FileMovement], Optional[SkippedMove]]:
    old_path = resolve_project_path(old_rel, root_path, config)
    new_path = resolve_project_path(new_rel, root_path, config)

    if old_path is None or new_path is None:
        logger.warning(f"Unresolvable move skipped: {old_rel} -> {new_rel}")
        return None, SkippedMove(old_rel, new_rel, "unresolvable")

    if old_path == new_path:
        logger.debug(f"Logical path unchanged for {old_rel} -> {new_rel}")
        return None, SkippedMove(old_rel, new_rel, "unchanged")

    return FileMovement(old_path, new_path, old_rel, new_rel), None
