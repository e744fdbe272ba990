from __future__ import annotations

"""
Candidate File Discovery Service.

Walks the project root and yields every source file eligible for
rewriting: matching one of the configured extensions and not excluded by
the ignore set. Ignored directories are pruned before descending.
"""

import logging
import os
from typing import Dict, Iterable, Sequence

from repath.core.services.ignore_rules import IgnoreSet
from repath.infra.fs import to_posix_relative

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def yield_candidate_files(
        root_path: str,
        extensions: Sequence[str],
        ignore_set: IgnoreSet,
) -> Iterable[Dict[str, str]]:
    """
    Traverse the project and yield source files that may hold references.

    Args:
        root_path: Absolute path to the project root.
        extensions: Whitelist of source extensions (with dot).
        ignore_set: Exclusion predicate over root-relative posix paths.

    Yields:
        Dict[str, str]: Metadata for each candidate file:
                        - file_path: Absolute path.
                        - rel_path: Root-relative posix path.
                        - file_name: Base filename.
    """
    root_abs = os.path.abspath(root_path)
    wanted = tuple(e.lower() for e in extensions)

    for root, dirs, files in os.walk(root_abs):
        rel_root = to_posix_relative(root, root_abs)

        dirs[:] = [
            d for d in dirs
            if not ignore_set.ignores(_join(rel_root, d), is_dir=True)
        ]
        dirs.sort()
        files.sort()

        for file_name in files:
            if not file_name.lower().endswith(wanted):
                continue

            rel_path = _join(rel_root, file_name)
            if ignore_set.ignores(rel_path):
                logger.debug(f"{rel_path} is excluded")
                continue

            yield {
                "file_path": os.path.join(root, file_name),
                "rel_path": rel_path,
                "file_name": file_name,
            }


def _join(rel_root: str, name: str) -> str:
    return f"{rel_root}/{name}" if rel_root else name
