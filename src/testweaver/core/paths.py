from __future__ import annotations

import os
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[1]
CONFIG_SUBDIR = "config"
DEFAULT_CONFIG_FILENAME = "default.json"
SCHEMA_FILENAME = "default-config.schema.json"
PROJECT_CONFIG_FILENAME = "testweaver.json"
GENERATED_SUFFIX = ".test.js"


def config_dir(base_dir: str | Path | None = None) -> Path:
    if base_dir is not None:
        return Path(base_dir) / CONFIG_SUBDIR
    # The environment only replaces the packaged location, never an explicit base_dir.
    override = os.environ.get("TESTWEAVER_DEFAULTS_DIR")
    if override:
        return Path(override).expanduser()
    return PACKAGE_DIR / CONFIG_SUBDIR


def default_config_path(base_dir: str | Path | None = None) -> Path:
    return config_dir(base_dir) / DEFAULT_CONFIG_FILENAME


def schema_path(base_dir: str | Path | None = None) -> Path:
    return config_dir(base_dir) / SCHEMA_FILENAME


def project_config_path(explicit: str | None = None, cwd: str | Path | None = None) -> Path:
    root = Path(cwd) if cwd is not None else Path.cwd()
    if explicit:
        return (root / Path(explicit).expanduser()).resolve()
    return root / PROJECT_CONFIG_FILENAME


def resolve_in_directory(path: str | Path, root: str | Path) -> Path:
    base = Path(root).resolve()
    candidate = Path(path).expanduser()
    resolved = candidate.resolve() if candidate.is_absolute() else (base / candidate).resolve()
    if not resolved.is_relative_to(base):
        raise ValueError(f"path escapes directory: {path}")
    return resolved


def output_path_for(source: str | Path) -> Path:
    source = Path(source)
    return source.with_name(f"{source.stem}{GENERATED_SUFFIX}")
