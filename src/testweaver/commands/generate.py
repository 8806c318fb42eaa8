from __future__ import annotations

from typing import Any, Mapping

import typer

from testweaver.commands._common import BlockKeyword, resolve_or_exit
from testweaver.core import matcher, watcher
from testweaver.core.config import EffectiveConfig, ResolvedConfig
from testweaver.core.logger import get_logger
from testweaver.core.options import explicit_options, merge_for_command
from testweaver.core.processor import process_file

log = get_logger("generate")


def log_configuration_details(resolved: ResolvedConfig, options: Mapping[str, Any]) -> None:
    config = resolved.effective_config
    log.info("starting testweaver (generate command)...")
    log.info("effective configuration sourced from: %s", resolved.config_source)

    if options.get("patterns"):
        log.info("override: using patterns from command line arguments.")
    if options.get("ignore"):
        log.info("override: using ignore patterns from command line arguments.")
    if options["dry_run"]:
        log.info("override: dry run mode enabled from command line.")
    elif config.is_dry_run:
        log.info("dry run mode enabled from configuration.")
    if options.get("test_keyword"):
        log.info("override: using '%s.todo' for test blocks from command line.", config.test_keyword)
    elif config.test_keyword != "it":
        log.info("using '%s.todo' for test blocks from configuration.", config.test_keyword)
    if options["no_cleanup"]:
        log.info("override: cleanup disabled from command line.")
    elif config.no_cleanup:
        log.info("cleanup disabled from configuration.")


def run_single_pass(config: EffectiveConfig) -> tuple[int, int]:
    log.info("using effective patterns: %s", ", ".join(config.effective_patterns))
    log.info("excluding: %s", ", ".join(config.effective_ignore_patterns))

    found = 0
    processed = 0
    for pattern in config.effective_patterns:
        try:
            files = matcher.match(pattern, config.effective_ignore_patterns)
        except (OSError, ValueError) as exc:
            log.error("error finding files for pattern '%s': %s", pattern, exc)
            continue
        if not files:
            log.warning("no yaml files found for pattern: '%s'", pattern)
            continue
        log.info("found %d files for pattern '%s'.", len(files), pattern)
        found += len(files)
        processed += sum(1 for path in files if process_file(path, config))

    if found:
        log.info("execution complete. processed %d of %d yaml files.", processed, found)
    else:
        log.info("no yaml files were found or processed based on the provided patterns.")
    return processed, found


def run_watch_mode(config: EffectiveConfig) -> None:
    if config.is_dry_run:
        log.warning("--dry-run is enabled. no files will be written even in watch mode.")
    log.info("entering watch mode for patterns: %s", ", ".join(config.effective_patterns))
    log.info("excluding: %s", ", ".join(config.effective_ignore_patterns))
    log.info("(press ctrl+c to exit)")
    watcher.start_watcher(config, process_file)


def generate(
    ctx: typer.Context,
    patterns: list[str] | None = typer.Argument(
        None, help="one or more glob patterns for yaml files. overrides config."
    ),
    watch: bool = typer.Option(
        False, "-w", "--watch", help="watch for changes in yaml files and regenerate test files automatically"
    ),
    config: str | None = typer.Option(
        None, "-c", "--config", help="custom configuration file to load instead of testweaver.json"
    ),
    ignore: list[str] | None = typer.Option(
        None, "-i", "--ignore", help="glob pattern to exclude from matched files (repeatable). overrides config."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="enable verbose output"),
    debug: bool = typer.Option(False, "-d", "--debug", help="enable debug output (most verbose)"),
    silent: bool = typer.Option(False, "-s", "--silent", help="suppress all output except critical errors"),
    dry_run: bool = typer.Option(
        False, "-n", "--dry-run", help="simulate file generation without writing to disk"
    ),
    test_keyword: BlockKeyword | None = typer.Option(
        None, "-k", "--test-keyword", help="keyword for test blocks (it or test)"
    ),
    no_cleanup: bool = typer.Option(
        False, "--no-cleanup", help="keep generated .test.js files when the source yaml is deleted in watch mode"
    ),
) -> None:
    """Generate jest test skeletons from yaml definitions."""
    cli_patterns = list(patterns or [])
    options = explicit_options(ctx)
    resolved = resolve_or_exit(ctx, cli_patterns, options)
    merged = merge_for_command(ctx, options)
    log_configuration_details(resolved, merged)

    effective = resolved.effective_config
    if not effective.effective_patterns:
        log.warning(
            "no patterns specified via command line or configuration files.\n"
            "provide patterns as arguments (e.g., 'testweaver generate \"tests/**/*.yaml\"') "
            "or define them in a config file (e.g., 'testweaver --config my-patterns.json')."
        )
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    if effective.watch_mode:
        run_watch_mode(effective)
    else:
        run_single_pass(effective)


def register(app: typer.Typer) -> None:
    app.command("generate")(generate)
    app.command("g", hidden=True)(generate)
