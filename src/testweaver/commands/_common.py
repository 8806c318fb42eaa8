from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Sequence

import typer

from testweaver.core import config as config_core
from testweaver.core.config import ResolvedConfig
from testweaver.core.errors import ConfigError
from testweaver.core.logger import get_logger, set_log_level
from testweaver.core.options import attach_config, root_state

log = get_logger("cli")


# Keyword used for the generated todo blocks.
class BlockKeyword(str, Enum):
    it = "it"
    test = "test"


def fail(exc: ConfigError) -> typer.Exit:
    log.critical("%s", exc)
    return typer.Exit(code=1)


def resolve_or_exit(
    ctx: typer.Context,
    patterns: Sequence[str],
    options: Mapping[str, Any],
    base_dir: str | Path | None = None,
) -> ResolvedConfig:
    """Run the config cascade for a command, attach the result, and exit 1 on fatal errors."""
    state = root_state(ctx)
    try:
        resolved = config_core.resolve(patterns, options, base_dir, validator=state.validator)
    except ConfigError as exc:
        raise fail(exc) from exc
    set_log_level(resolved.effective_config.log_level)
    attach_config(ctx, resolved)
    return resolved
