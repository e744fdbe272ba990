from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a subprocess and checks exit codes,
stream output and file system side effects.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "repath" / "main.py"

MAIN = Path("src/ServerScriptService/Main.server.lua")
OLD_MODULE = Path("src/ServerScriptService/OldModule.lua")


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding the interpreter and script).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: Exit code, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_mv_moves_and_rewrites(sample_project: Path):
    result = run_cli([
        "--root", str(sample_project),
        "mv", str(sample_project / OLD_MODULE), str(sample_project / "src/ServerScriptService/Lib/New.lua"),
    ])

    assert result.returncode == 0, result.stderr
    assert "Applied path refactor on 1 file(s)." in result.stdout
    assert (sample_project / "src/ServerScriptService/Lib/New.lua").exists()
    assert "require(SSS.Lib.New)" in (sample_project / MAIN).read_text(encoding="utf-8")


def test_mv_relative_paths_from_project_cwd(sample_project: Path):
    result = run_cli(
        ["mv", str(OLD_MODULE), "src/ReplicatedStorage/OldModule.lua"],
        cwd=sample_project,
    )

    assert result.returncode == 0, result.stderr
    assert "require(RS.OldModule)" in (sample_project / MAIN).read_text(encoding="utf-8")


def test_apply_json_output(sample_project: Path):
    new = sample_project / "src/ServerScriptService/Renamed.lua"
    os.rename(sample_project / OLD_MODULE, new)

    result = run_cli(["--root", str(sample_project), "--json", "apply", str(sample_project / OLD_MODULE), str(new)])

    assert result.returncode == 0, result.stderr
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert data["changed_files"] == [MAIN.as_posix()]
    assert data["movements"][0]["new_path"] == {"anchor": "ServerScriptService", "segments": ["Renamed"]}


def test_dry_run_changes_nothing(sample_project: Path):
    before = (sample_project / MAIN).read_text(encoding="utf-8")

    result = run_cli([
        "--root", str(sample_project),
        "mv", "--dry-run", str(sample_project / OLD_MODULE), str(sample_project / "src/ServerScriptService/X.lua"),
    ])

    assert result.returncode == 0, result.stderr
    assert "Dry run: 1 file(s) would change." in result.stdout
    assert (sample_project / OLD_MODULE).exists()
    assert (sample_project / MAIN).read_text(encoding="utf-8") == before


def test_resolve(sample_project: Path):
    result = run_cli(["--root", str(sample_project), "resolve", str(sample_project / OLD_MODULE)])

    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == 'game:GetService("ServerScriptService").OldModule'


def test_resolve_unresolvable(sample_project: Path):
    loose = sample_project / "src" / "Loose.lua"
    loose.write_text("return 1\n", encoding="utf-8")

    result = run_cli(["--root", str(sample_project), "resolve", str(loose)])

    assert result.returncode == 1
    assert "No logical path" in result.stderr


def test_init_ignore(sample_project: Path):
    first = run_cli(["--root", str(sample_project), "init-ignore"])
    second = run_cli(["--root", str(sample_project), "init-ignore"])

    assert first.returncode == 0 and second.returncode == 0
    assert "Created" in first.stdout
    assert "already exists" in second.stdout
    assert (sample_project / ".repathignore").exists()


def test_dump_config(sample_project: Path):
    result = run_cli(["--root", str(sample_project), "--ext", "lua", "--dump-config"])

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["root_path"] == str(sample_project)
    assert data["extensions"] == [".lua"]


def test_invalid_inputs(sample_project: Path, tmp_path: Path):
    outside = run_cli(["--root", str(sample_project), "apply", "/elsewhere/a.lua", str(sample_project / "b.lua")])
    missing = run_cli(["--root", str(sample_project), "mv", str(sample_project / "nope.lua"), str(sample_project / "b.lua")])
    no_root = run_cli(["--root", str(tmp_path / "absent"), "init-ignore"])
    no_command = run_cli(["--root", str(sample_project)])

    assert outside.returncode == 2
    assert "Not within the workspace folder" in outside.stderr
    assert missing.returncode == 2
    assert no_root.returncode == 2
    assert no_command.returncode == 2
