from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any

REPO_ROOT = Path(__file__).resolve().parents[1]
PACKAGED_DEFAULTS = REPO_ROOT / "src" / "testweaver" / "config" / "default.json"
PACKAGED_SCHEMA = REPO_ROOT / "src" / "testweaver" / "config" / "default-config.schema.json"


def default_config(**overrides: Any) -> dict[str, Any]:
    config = json.loads(PACKAGED_DEFAULTS.read_text(encoding="utf-8"))
    config.update(overrides)
    return config


def write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def make_base_dir(root: Path, **overrides: Any) -> Path:
    """Lay out ``<root>/config`` with the packaged schema and a default config."""
    write_json(root / "config" / "default.json", default_config(**overrides))
    (root / "config" / "default-config.schema.json").write_text(
        PACKAGED_SCHEMA.read_text(encoding="utf-8"), encoding="utf-8"
    )
    return root


def cli_env(extra: dict[str, str] | None = None) -> dict[str, str]:
    env = os.environ.copy()
    src = str(REPO_ROOT / "src")
    env["PYTHONPATH"] = src + (os.pathsep + env["PYTHONPATH"] if env.get("PYTHONPATH") else "")
    env.pop("TESTWEAVER_DEFAULTS_DIR", None)
    if extra:
        env.update(extra)
    return env


def run_cli(cwd: Path, *args: str, env: dict[str, str] | None = None, input: str = ""):
    return subprocess.run(
        [sys.executable, "-m", "testweaver.cli", *args],
        cwd=cwd,
        env=env or cli_env(),
        capture_output=True,
        text=True,
        input=input,
    )
