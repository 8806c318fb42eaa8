"""
Configuration cascade: command-line options > project config > default config.

The default config ships with the package and must validate against the
schema. A project config (``testweaver.json`` in the working directory, or the
file given with ``--config``) is laid over it key by key, and the command-line
options are then applied field by field.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from testweaver.core import paths
from testweaver.core.errors import ConfigNotFoundError, ConfigValidationError
from testweaver.core.logger import LogLevel, get_logger
from testweaver.core.schema import SchemaValidator

log = get_logger("config")

GENERATED_FILE_EXCLUSION = f"**/*{paths.GENERATED_SUFFIX}"
DEFAULT_TEST_KEYWORD = "it"

# Used by `init` when the packaged default.json cannot be read.
FALLBACK_DEFAULTS: dict[str, Any] = {
    "patterns": [
        "**/__tests__/**/*.{yaml,yml}",
        "**/*.test.{yaml,yml}",
        "**/*.spec.{yaml,yml}",
        "tests/**/*.{yaml,yml}",
        "features/**/*.{yaml,yml}",
    ],
    "ignore": ["node_modules", ".git", "temp_files/**/*.{yaml,yml}"],
    "verbose": False,
    "debug": False,
    "silent": False,
    "dryRun": False,
    "testKeyword": "it",
    "noCleanup": False,
    "quick": False,
    "force": False,
    "no-defaults": False,
}


@dataclass(frozen=True)
class EffectiveConfig:
    log_level: LogLevel = LogLevel.INFO
    effective_patterns: tuple[str, ...] = ()
    effective_ignore_patterns: tuple[str, ...] = (GENERATED_FILE_EXCLUSION,)
    is_dry_run: bool = False
    test_keyword: str = DEFAULT_TEST_KEYWORD
    watch_mode: bool = False
    no_cleanup: bool = False
    quick: bool = False
    force: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "log_level": self.log_level.name,
            "effective_patterns": list(self.effective_patterns),
            "effective_ignore_patterns": list(self.effective_ignore_patterns),
            "is_dry_run": self.is_dry_run,
            "test_keyword": self.test_keyword,
            "watch_mode": self.watch_mode,
            "no_cleanup": self.no_cleanup,
            "quick": self.quick,
            "force": self.force,
        }


@dataclass(frozen=True)
class ResolvedConfig:
    effective_config: EffectiveConfig
    config_source: str
    file_config: Mapping[str, Any] = field(default_factory=dict)


def load_config_file(path: str | Path) -> Any | None:
    """Parse one JSON file. Missing files yield None; unreadable ones warn and yield None."""
    path = Path(path)
    if not path.is_file():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("could not parse config file '%s'. error: %s", path, exc)
        return None


def merge_file_configs(default: Mapping[str, Any], project: Mapping[str, Any]) -> dict[str, Any]:
    # Whole-value replacement: a project array replaces the default array.
    merged = dict(default)
    for key, value in project.items():
        merged[key] = value
    return merged


def determine_log_level(options: Mapping[str, Any], merged: Mapping[str, Any]) -> LogLevel:
    for source in (options, merged):
        if source.get("debug"):
            return LogLevel.DEBUG
        if source.get("verbose"):
            return LogLevel.VERBOSE
        if source.get("silent"):
            return LogLevel.SILENT
    return LogLevel.INFO


def _unique(patterns: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(patterns))


def _ignore_patterns(options: Mapping[str, Any], merged: Mapping[str, Any]) -> tuple[str, ...]:
    cli_ignore = list(options.get("ignore") or [])
    chosen = cli_ignore if cli_ignore else list(merged.get("ignore") or [])
    return _unique([GENERATED_FILE_EXCLUSION, *chosen])


def _flag(options: Mapping[str, Any], option_key: str, merged: Mapping[str, Any], config_key: str) -> bool:
    if options.get(option_key) is not None:
        return bool(options[option_key])
    return bool(merged.get(config_key, False))


def build_effective_config(
    cli_patterns: Sequence[str],
    options: Mapping[str, Any],
    merged: Mapping[str, Any],
) -> EffectiveConfig:
    patterns = list(cli_patterns) if cli_patterns else list(merged.get("patterns") or [])
    return EffectiveConfig(
        log_level=determine_log_level(options, merged),
        effective_patterns=tuple(patterns),
        effective_ignore_patterns=_ignore_patterns(options, merged),
        is_dry_run=_flag(options, "dry_run", merged, "dryRun"),
        test_keyword=options.get("test_keyword") or merged.get("testKeyword") or DEFAULT_TEST_KEYWORD,
        watch_mode=bool(options.get("watch", False)),
        no_cleanup=_flag(options, "no_cleanup", merged, "noCleanup"),
        quick=_flag(options, "quick", merged, "quick"),
        force=_flag(options, "force", merged, "force"),
    )


def load_default_config(validator: SchemaValidator, base_dir: str | Path | None = None) -> dict[str, Any]:
    path = paths.default_config_path(base_dir)
    default = load_config_file(path)
    if not isinstance(default, dict):
        raise ConfigNotFoundError(path, kind="default")
    validator.validate(default, f"default config: {path}")
    return default


def resolve(
    cli_patterns: Sequence[str],
    cli_options: Mapping[str, Any],
    base_dir: str | Path | None = None,
    *,
    validator: SchemaValidator | None = None,
    cwd: str | Path | None = None,
) -> ResolvedConfig:
    """
    Resolve the effective configuration for one invocation.

    ``cli_options`` must only hold options the user actually passed: a missing
    key means "not given on the command line" and lets the config files decide.
    Raises a ``ConfigError`` subclass on any fatal problem.
    """
    if validator is None:
        validator = SchemaValidator()
    if not validator.compiled:
        validator.compile(paths.schema_path(base_dir))

    default = load_default_config(validator, base_dir)
    config_source = f"default config: {paths.default_config_path(base_dir)}"

    explicit = cli_options.get("config")
    project_path = paths.project_config_path(explicit, cwd)
    project = load_config_file(project_path)
    if project is None:
        if explicit:
            raise ConfigNotFoundError(project_path, kind="project")
        project = {}
    else:
        config_source = f"project config: {project_path}"
        if not isinstance(project, dict):
            raise ConfigValidationError(config_source, ["root: project configuration must be a JSON object"])
        log.debug("loaded project configuration from %s", project_path)

    merged = merge_file_configs(default, project)
    validator.validate(merged, config_source)

    effective = build_effective_config(cli_patterns, cli_options, merged)
    return ResolvedConfig(effective_config=effective, config_source=config_source, file_config=merged)
