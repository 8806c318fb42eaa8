from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ConfigError(RuntimeError):
    """Fatal configuration problem. Commands exit with code 1 when one escapes."""


class SchemaLoadError(ConfigError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"could not load or compile json schema from '{path}': {reason}")
        self.path = path
        self.reason = reason


class SchemaNotInitializedError(ConfigError):
    def __init__(self) -> None:
        super().__init__("json schema validator not initialized. cannot validate configuration.")


class ConfigValidationError(ConfigError):
    def __init__(self, source: str, errors: Sequence[str]) -> None:
        lines = [f"configuration from '{source}' is invalid according to the schema:"]
        lines.extend(f"    - {error}" for error in errors)
        super().__init__("\n".join(lines))
        self.source = source
        self.errors = list(errors)


class ConfigNotFoundError(ConfigError):
    def __init__(self, path: Path, kind: str) -> None:
        if kind == "default":
            message = f"default configuration file '{path}' not found or is invalid. cannot proceed."
        else:
            message = f"custom configuration file specified with --config was not found or is invalid at '{path}'."
        super().__init__(message)
        self.path = path
        self.kind = kind
