from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

import typer

from testweaver.core.config import ResolvedConfig
from testweaver.core.flags import normalize, option_definitions
from testweaver.core.schema import SchemaValidator

# Source names rather than enum members: Typer may vendor its own click.
_EXPLICIT_SOURCES = {"COMMANDLINE", "ENVIRONMENT"}


@dataclass
class CliState:
    """Per-invocation state hung off the root Typer context."""

    validator: SchemaValidator
    resolved: ResolvedConfig | None = None


def root_state(ctx: typer.Context) -> CliState:
    root = ctx.find_root()
    if not isinstance(root.obj, CliState):
        root.obj = CliState(validator=SchemaValidator())
    return root.obj


def _is_explicit(ctx: typer.Context, name: str) -> bool:
    source = ctx.get_parameter_source(name)
    return source is not None and source.name in _EXPLICIT_SOURCES


def _explicit_params(ctx: typer.Context) -> dict[str, Any]:
    return {
        name: value.value if isinstance(value, Enum) else value
        for name, value in ctx.params.items()
        if _is_explicit(ctx, name)
    }


def explicit_options(ctx: typer.Context) -> dict[str, Any]:
    """Options the user actually passed, root options first, command options on top."""
    options: dict[str, Any] = {}
    chain = []
    current: typer.Context | None = ctx
    while current is not None:
        chain.append(current)
        current = current.parent
    for context in reversed(chain):
        for name, value in _explicit_params(context).items():
            # `-v` before or after the command name counts the same.
            if value or name not in options:
                options[name] = value
    return options


def attach_config(ctx: typer.Context, resolved: ResolvedConfig) -> None:
    root_state(ctx).resolved = resolved


def merge_for_command(ctx: typer.Context, options: Mapping[str, Any]) -> dict[str, Any]:
    state = root_state(ctx)
    attached = state.resolved.effective_config.as_dict() if state.resolved else {}
    merged = {**attached, **options}
    root = ctx.find_root()
    definitions = option_definitions(root.command)
    if ctx is not root:
        definitions += option_definitions(ctx.command)
    return normalize(merged, definitions)
