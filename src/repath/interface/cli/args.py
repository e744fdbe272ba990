from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global options plus one subparser per
command) and translates the parsed namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from repath.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the RePath CLI.

    Global options go before the command name, e.g.
    ``repath --root game mv src/Shared/A.lua src/Shared/Util/A.lua``.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="repath",
        description=i18n.t("app.description"),
    )

    # --- Project ---
    p.add_argument(
        "-r", "--root",
        dest="root_path",
        default=None,
        help=i18n.t("cli.args.root"),
    )
    p.add_argument(
        "--source-root",
        dest="source_root",
        default=None,
        help=i18n.t("cli.args.source_root"),
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help=i18n.t("cli.args.ext"),
    )
    p.add_argument(
        "--no-ignore-file",
        action="store_true",
        help=i18n.t("cli.args.no_ignore"),
    )

    # --- Diagnostics and output ---
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))
    p.add_argument("--log-file", dest="log_file", default=None, help=i18n.t("cli.args.log_file"))
    p.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))

    # --- Commands ---
    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    mv = sub.add_parser("mv", help=i18n.t("cli.args.mv"))
    mv.add_argument("source", help=i18n.t("cli.args.src"))
    mv.add_argument("destination", help=i18n.t("cli.args.dst"))
    mv.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))

    apply = sub.add_parser("apply", help=i18n.t("cli.args.apply"))
    apply.add_argument("old", help=i18n.t("cli.args.old"))
    apply.add_argument("new", help=i18n.t("cli.args.new"))
    apply.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))

    resolve = sub.add_parser("resolve", help=i18n.t("cli.args.resolve"))
    resolve.add_argument("path", help=i18n.t("cli.args.path"))

    sub.add_parser("init-ignore", help=i18n.t("cli.args.init_ignore"))

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Overrides for the keys the CLI can set.
    """
    overrides: Dict[str, Any] = {}

    overrides["root_path"] = args.root_path
    overrides["source_root"] = args.source_root

    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.no_ignore_file:
        overrides["respect_ignore_file"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
