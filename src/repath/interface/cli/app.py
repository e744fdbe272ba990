from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge
(defaults + CLI overrides) and validation, command dispatch and result
rendering as text or JSON.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from repath.core.pipeline.engine import move_and_refactor, run_refactor
from repath.core.pipeline.validator import validate_config
from repath.core.resolution.path_resolver import resolve_project_path
from repath.core.services.ignore_rules import create_ignore_file
from repath.domain.config import get_default_config
from repath.domain.errors import MoveError
from repath.domain.pipeline_models import RefactorResult
from repath.infra.fs import is_within_root, to_posix_relative
from repath.infra.logging import LoggingConfig, configure_logging, get_logger
from repath.interface.cli import args as cli_args
from repath.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid input,
             130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration merge and validation
    raw_conf = _merge_config(get_default_config(), cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.command:
        parser.print_help(sys.stderr)
        return EXIT_INVALID_INPUT

    root_path = clean_conf["root_path"]
    if not os.path.isdir(root_path):
        return _fail(i18n.t("cli.errors.path_not_exist", path=root_path), EXIT_INVALID_INPUT)

    # 4. Command dispatch
    try:
        if args.command == "init-ignore":
            return _cmd_init_ignore(clean_conf)
        if args.command == "resolve":
            return _cmd_resolve(args.path, clean_conf, args.json_output)
        if args.command == "mv":
            return _cmd_refactor(args.source, args.destination, clean_conf, args, move=True)
        return _cmd_refactor(args.old, args.new, clean_conf, args, move=False)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = i18n.t("cli.errors.refactor_fail", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_refactor(
        old: str,
        new: str,
        config: Dict[str, Any],
        args: Any,
        *,
        move: bool,
) -> int:
    root_path = config["root_path"]
    old_abs, new_abs = os.path.abspath(old), os.path.abspath(new)

    for path in (old_abs, new_abs):
        if not is_within_root(path, root_path):
            return _fail(i18n.t("cli.errors.not_within_root", path=path), EXIT_INVALID_INPUT)

    print(i18n.t("cli.status.starting"), file=sys.stderr)
    if move:
        try:
            result = move_and_refactor(old_abs, new_abs, config, dry_run=args.dry_run)
        except MoveError as e:
            return _fail(i18n.t("cli.errors.move_fail", error=str(e)), EXIT_INVALID_INPUT)
    else:
        result = run_refactor([(old_abs, new_abs)], config, dry_run=args.dry_run)

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2, default=str))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE


def _cmd_resolve(path: str, config: Dict[str, Any], json_output: bool) -> int:
    root_path = config["root_path"]
    abs_path = os.path.abspath(path)
    if not is_within_root(abs_path, root_path):
        return _fail(i18n.t("cli.errors.not_within_root", path=abs_path), EXIT_INVALID_INPUT)

    rel_path = to_posix_relative(abs_path, root_path)
    logical = resolve_project_path(
        rel_path, root_path, config, is_directory=os.path.isdir(abs_path)
    )
    if logical is None:
        return _fail(i18n.t("cli.errors.unresolvable", path=rel_path), EXIT_FAILURE)

    if json_output:
        payload = {
            "path": rel_path,
            "anchor": logical.anchor,
            "segments": list(logical.segments),
            "expression": str(logical),
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(str(logical))
    return EXIT_OK


def _cmd_init_ignore(config: Dict[str, Any]) -> int:
    root_path = config["root_path"]
    path = os.path.join(root_path, config["ignore_file"])
    try:
        created = create_ignore_file(root_path, config)
    except OSError as e:
        return _fail(i18n.t("cli.errors.ignore_fail", error=str(e)), EXIT_FAILURE)

    key = "cli.status.ignore_created" if created else "cli.status.ignore_exists"
    print(i18n.t(key, path=path))
    return EXIT_OK

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge known, non-None override keys into the base configuration."""
    out = dict(base)
    keys_to_merge = ["root_path", "source_root", "extensions", "respect_ignore_file"]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out


def _fail(msg: str, code: int) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return code


def _print_human_summary(result: RefactorResult) -> None:
    """Render a RefactorResult as a terminal report."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    for skip in result.skipped_moves:
        print(i18n.t("cli.status.skipped", old=skip.old_rel_path, new=skip.new_rel_path, reason=skip.reason))

    count = len(result.changed_files)
    if count == 0:
        print(i18n.t("cli.status.nothing"))
    elif result.dry_run:
        print(i18n.t("cli.status.dry_run", count=count))
    else:
        print(i18n.t("cli.status.applied", count=count))

    for rel_path in result.changed_files:
        print(f"  - {rel_path}")

    if result.movements:
        print(i18n.t("cli.status.scanned", count=result.files_scanned))


if __name__ == "__main__":
    sys.exit(main())
