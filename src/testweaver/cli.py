from __future__ import annotations

from importlib import metadata
from pathlib import Path

import typer
from typer.core import TyperGroup

from testweaver.core import registry
from testweaver.core.logger import LogLevel, configure_logging
from testweaver.core.options import CliState, root_state
from testweaver.core.schema import SchemaValidator

COMMANDS_DIR = Path(__file__).resolve().parent / "commands"
COMMANDS_PACKAGE = "testweaver.commands"
DEFAULT_COMMAND = "generate"
DESCRIPTION = "a cli tool that weaves jest-compatible .test.js files from simple yaml definitions"


def _version() -> str:
    try:
        return metadata.version("testweaver")
    except metadata.PackageNotFoundError:
        return "0.1.0"


class DefaultCommandGroup(TyperGroup):
    """Routes invocations without a known subcommand to ``generate``."""

    default_command = DEFAULT_COMMAND

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        root_opts = {opt for param in self.get_params(ctx) for opt in (*param.opts, *param.secondary_opts)}
        index = 0
        while index < len(args) and args[index] in root_opts:
            index += 1
        wants_help = any(arg in ctx.help_option_names for arg in args[:index])
        if not wants_help and self.default_command in self.commands:
            if index == len(args) or args[index] not in self.commands:
                args = [*args[:index], self.default_command, *args[index:]]
        return super().parse_args(ctx, args)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"testweaver {_version()}")
        raise typer.Exit(code=0)


def _root(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "-v", "--verbose", help="enable verbose output for more detailed information"),
    debug: bool = typer.Option(
        False, "-d", "--debug", help="enable debug output for highly detailed debugging information (most verbose)"
    ),
    silent: bool = typer.Option(
        False, "-s", "--silent", help="suppress all output except critical errors (least verbose)"
    ),
    version: bool | None = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="show the version and exit"
    ),
) -> None:
    state = root_state(ctx)
    if debug:
        level = LogLevel.DEBUG
    elif verbose:
        level = LogLevel.VERBOSE
    elif silent:
        level = LogLevel.SILENT
    else:
        level = LogLevel.INFO
    configure_logging(level)
    ctx.obj = state


def create_app(
    commands_dir: str | Path = COMMANDS_DIR,
    package: str | None = COMMANDS_PACKAGE,
) -> typer.Typer:
    app = typer.Typer(
        cls=DefaultCommandGroup,
        add_completion=False,
        help=f"testweaver - {DESCRIPTION}",
        context_settings={"help_option_names": ["-h", "--help"]},
    )
    app.callback()(_root)
    registry.load_commands(app, commands_dir, package)
    return app


def main() -> None:
    configure_logging(LogLevel.INFO)
    app = create_app()
    app(obj=CliState(validator=SchemaValidator()))


if __name__ == "__main__":
    main()
