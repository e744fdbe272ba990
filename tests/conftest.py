from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Provides a temporary Rojo-style project used across test layers.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from repath.domain.config import get_default_config  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def project_config(tmp_path: Path) -> Dict[str, Any]:
    """Default configuration rooted at the test's temporary directory."""
    cfg = get_default_config()
    cfg["root_path"] = str(tmp_path)
    return cfg


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small project laid out by service folders (no project file).

    Structure:
    /src
      /ServerScriptService
        Main.server.lua      (requires Shared modules through aliases)
        OldModule.lua
      /ReplicatedStorage
        /Shared
          Util.lua
          Config.luau
    """
    sss = tmp_path / "src" / "ServerScriptService"
    shared = tmp_path / "src" / "ReplicatedStorage" / "Shared"
    sss.mkdir(parents=True)
    shared.mkdir(parents=True)

    (sss / "Main.server.lua").write_text(
        'local SSS = game:GetService("ServerScriptService")\n'
        'local RS = game:GetService("ReplicatedStorage")\n'
        "local Shared = RS.Shared\n"
        "\n"
        "local Old = require(SSS.OldModule)\n"
        "local Util = require(Shared.Util)\n"
        "local Config = require(RS.Shared.Config)\n",
        encoding="utf-8",
    )
    (sss / "OldModule.lua").write_text("return {}\n", encoding="utf-8")
    (shared / "Util.lua").write_text("return {}\n", encoding="utf-8")
    (shared / "Config.luau").write_text(
        'local Util = require(game:GetService("ReplicatedStorage").Shared.Util)\n'
        "return {}\n",
        encoding="utf-8",
    )
    return tmp_path
