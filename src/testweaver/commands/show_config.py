from __future__ import annotations

import typer

from testweaver.commands._common import BlockKeyword, resolve_or_exit
from testweaver.core.jsonio import dumps
from testweaver.core.options import explicit_options, merge_for_command


def show_config(
    ctx: typer.Context,
    patterns: list[str] | None = typer.Argument(None, help="glob patterns that would override the configured ones"),
    watch: bool = typer.Option(False, "-w", "--watch", help="resolve as if watch mode were requested"),
    config: str | None = typer.Option(None, "-c", "--config", help="custom configuration file to load"),
    ignore: list[str] | None = typer.Option(None, "-i", "--ignore", help="glob pattern to exclude (repeatable)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="enable verbose output"),
    debug: bool = typer.Option(False, "-d", "--debug", help="enable debug output (most verbose)"),
    silent: bool = typer.Option(False, "-s", "--silent", help="suppress all output except critical errors"),
    dry_run: bool = typer.Option(False, "-n", "--dry-run", help="resolve as if --dry-run were passed"),
    test_keyword: BlockKeyword | None = typer.Option(
        None, "-k", "--test-keyword", help="keyword for test blocks (it or test)"
    ),
    no_cleanup: bool = typer.Option(False, "--no-cleanup", help="resolve as if --no-cleanup were passed"),
) -> None:
    """Print the effective configuration as JSON."""
    options = explicit_options(ctx)
    resolved = resolve_or_exit(ctx, list(patterns or []), options)
    merged = merge_for_command(ctx, options)
    typer.echo(dumps({"config_source": resolved.config_source, "options": merged}), nl=False)


def register(app: typer.Typer) -> None:
    app.command("config")(show_config)
