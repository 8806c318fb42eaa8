"""
``testweaver init``: write a project configuration file.

Starts from the packaged default config, optionally asks the user to adjust
it, and writes either the full settings or only those that differ from the
defaults.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Mapping

import typer

from testweaver.core import paths
from testweaver.core.config import FALLBACK_DEFAULTS, load_config_file
from testweaver.core.jsonio import dumps
from testweaver.core.logger import get_logger
from testweaver.core.options import explicit_options, merge_for_command
from testweaver.core.schema import TEST_KEYWORDS

log = get_logger("init")

INIT_ONLY_KEYS = ("quick", "force", "no-defaults")

# Commas inside brace groups belong to the glob, e.g. "*.{yaml,yml}".
_LIST_SEPARATOR = re.compile(r",(?![^{]*\})")


def _split(text: str) -> list[str]:
    return [part.strip() for part in _LIST_SEPARATOR.split(text) if part.strip()]


def normalize_filename(filename: str | None) -> str:
    name = filename or paths.PROJECT_CONFIG_FILENAME
    if Path(name).suffix.lower() != ".json":
        name += ".json"
        log.info("appending '.json' extension to filename. new filename: '%s'", name)
    return name


def load_init_defaults(base_dir: str | Path | None = None) -> dict[str, Any]:
    path = paths.default_config_path(base_dir)
    defaults = load_config_file(path)
    if isinstance(defaults, dict):
        log.info("using settings from '%s' for initialization.", path)
        return defaults
    log.warning("could not read or parse default configuration from '%s'.", path)
    log.warning("initializing with hardcoded fallback defaults.")
    return dict(FALLBACK_DEFAULTS)


def _ask_keyword(default: str) -> str:
    while True:
        answer = typer.prompt(f"keyword for generated test blocks ({' or '.join(TEST_KEYWORDS)})", default=default)
        if answer in TEST_KEYWORDS:
            return answer
        log.error("'%s' is not a valid keyword. choose one of: %s", answer, ", ".join(TEST_KEYWORDS))


def ask_questions(defaults: Mapping[str, Any]) -> dict[str, Any]:
    answers: dict[str, Any] = {}
    patterns = typer.prompt(
        "glob patterns for yaml test definition files (comma-separated)",
        default=", ".join(defaults["patterns"]),
    )
    extra_patterns = typer.prompt(
        "any additional patterns (comma-separated, e.g., \"src/**/*.yaml\")", default="", show_default=False
    )
    answers["patterns"] = list(dict.fromkeys([*_split(patterns), *_split(extra_patterns)]))
    ignore = typer.prompt(
        "glob patterns to ignore during processing (comma-separated)",
        default=", ".join(defaults["ignore"]),
    )
    extra_ignore = typer.prompt(
        "any additional ignore patterns (comma-separated, e.g., \"temp/**/*.yaml\")", default="", show_default=False
    )
    answers["ignore"] = list(dict.fromkeys([*_split(ignore), *_split(extra_ignore)]))
    answers["testKeyword"] = _ask_keyword(defaults["testKeyword"])
    answers["dryRun"] = typer.confirm(
        "enable dry run mode (simulate generation without writing files)?", default=defaults["dryRun"]
    )
    answers["noCleanup"] = typer.confirm(
        "disable automatic cleanup of generated files when source yaml is deleted?", default=defaults["noCleanup"]
    )
    answers["verbose"] = typer.confirm("enable verbose logging for detailed output?", default=defaults["verbose"])
    answers["debug"] = typer.confirm(
        "enable debug logging for highly detailed debugging (most verbose)?", default=defaults["debug"]
    )
    answers["silent"] = typer.confirm("suppress all output except critical errors?", default=defaults["silent"])
    answers["no-defaults"] = typer.confirm(
        "only include settings in the generated file whose values differ from defaults?",
        default=defaults["no-defaults"],
    )
    return answers


def sparse_config(final: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    sparse: dict[str, Any] = {}
    for key, default_value in defaults.items():
        if key in INIT_ONLY_KEYS or key not in final:
            continue
        value = final[key]
        if isinstance(default_value, list):
            if sorted(value) != sorted(default_value):
                sparse[key] = value
        elif value != default_value:
            sparse[key] = value
    return sparse


def init(
    ctx: typer.Context,
    filename: str | None = typer.Argument(None, help="name of configuration file to create"),
    quick: bool = typer.Option(
        False, "-q", "--quick", help="skip the questions and write the configuration file with default values"
    ),
    force: bool = typer.Option(False, "-f", "--force", help="overwrite the configuration file if it already exists"),
    no_defaults: bool = typer.Option(
        False, "--no-defaults", help="only include settings whose values differ from defaults"
    ),
) -> None:
    """Create a configuration file in the current directory."""
    options = merge_for_command(ctx, explicit_options(ctx))
    name = normalize_filename(filename)
    cwd = Path.cwd()
    try:
        target = paths.resolve_in_directory(name, cwd)
    except ValueError:
        log.critical("cannot save configuration file outside the current project directory.")
        log.critical("attempted path: '%s'", cwd / name)
        raise typer.Exit(code=1)

    defaults = load_init_defaults()

    if target.exists():
        if options["force"]:
            log.warning("'%s' already exists at '%s'. forcing overwrite due to --force flag.", name, target)
        else:
            log.warning("'%s' already exists at '%s'. not overwriting.", name, target)
            log.warning("to force overwrite, use the '--force' flag.")
            raise typer.Exit(code=0)

    final = dict(defaults)
    if not options["quick"]:
        log.info("starting interactive configuration for '%s'...", name)
        log.info("(press enter to accept default, or modify values)")
        final.update(ask_questions(defaults))

    to_save = final
    if options["no_defaults"] or final.get("no-defaults"):
        log.info("filtering configuration to include only non-default settings (--no-defaults enabled)...")
        to_save = sparse_config(final, defaults)

    try:
        target.write_text(dumps(to_save), encoding="utf-8")
    except OSError as exc:
        log.critical("could not create '%s': %s", name, exc)
        raise typer.Exit(code=1)
    log.info("successfully created '%s' at '%s'.", name, target)
    log.info("you can now customize this file or run 'testweaver generate' without patterns.")


def register(app: typer.Typer) -> None:
    app.command("init")(init)
    app.command("i", hidden=True)(init)
