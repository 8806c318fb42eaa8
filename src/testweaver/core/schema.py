"""
JSON Schema validation for testweaver configuration files.

One ``SchemaValidator`` is compiled at startup and handed to everything that
validates configuration. Validation failures are never partial: every
violated field is reported before the caller gives up.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import jsonschema

from testweaver.core.errors import ConfigValidationError, SchemaLoadError, SchemaNotInitializedError
from testweaver.core.logger import get_logger

log = get_logger("schema")

DRAFT_07 = "http://json-schema.org/draft-07/schema#"
TEST_KEYWORDS = ("it", "test")

_DESCRIPTIONS = {
    "patterns": "One or more glob patterns for YAML files to be processed (e.g., 'tests/**/*.yaml').",
    "ignore": "List of glob file patterns to exclude from matched files (e.g., '**/temp/*.yaml').",
    "verbose": "Enable verbose output for more detailed information.",
    "debug": "Enable debug output for highly detailed debugging information (most verbose).",
    "silent": "Suppress all output except critical errors (least verbose).",
    "dryRun": "Perform a dry run: simulate file generation without writing to disk.",
    "testKeyword": "Specify keyword for test blocks ('it' or 'test').",
    "noCleanup": "Do not delete generated .test.js files when source YAML is unlinked in watch mode.",
    "quick": "For the 'init' command: skip asking questions and generate the configuration file with default values.",
    "force": "For the 'init' command: force overwriting the configuration file if it already exists.",
    "no-defaults": "For the 'init' command: only include settings whose values differ from defaults.",
}


def _format_error(error: jsonschema.ValidationError) -> str:
    location = "/".join(str(part) for part in error.absolute_path)
    return f"{'/' + location if location else 'root'}: {error.message}"


class SchemaValidator:
    def __init__(self, schema: Mapping[str, Any] | None = None) -> None:
        self._validator: jsonschema.Draft7Validator | None = None
        self.source: Path | None = None
        if schema is not None:
            self._set_schema(schema)

    @property
    def compiled(self) -> bool:
        return self._validator is not None

    def _set_schema(self, schema: Mapping[str, Any]) -> None:
        jsonschema.Draft7Validator.check_schema(schema)
        self._validator = jsonschema.Draft7Validator(schema)

    def compile(self, path: str | Path) -> "SchemaValidator":
        path = Path(path)
        if self._validator is not None:
            log.debug("json schema already compiled from %s; ignoring %s", self.source, path)
            return self
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SchemaLoadError(path, exc.strerror or str(exc)) from exc
        except json.JSONDecodeError as exc:
            raise SchemaLoadError(path, str(exc)) from exc
        if not isinstance(schema, dict):
            raise SchemaLoadError(path, "schema document must be a JSON object")
        try:
            self._set_schema(schema)
        except jsonschema.SchemaError as exc:
            raise SchemaLoadError(path, exc.message) from exc
        self.source = path
        log.debug("json schema loaded and compiled from: %s", path)
        return self

    def errors_for(self, config: Any) -> list[str]:
        if self._validator is None:
            raise SchemaNotInitializedError()
        found = sorted(self._validator.iter_errors(config), key=lambda e: [str(p) for p in e.absolute_path])
        return [_format_error(error) for error in found]

    def validate(self, config: Any, source: str) -> None:
        errors = self.errors_for(config)
        if errors:
            raise ConfigValidationError(source, errors)
        log.debug("configuration from '%s' successfully validated against schema.", source)


def load_and_compile_schema(path: str | Path) -> SchemaValidator:
    return SchemaValidator().compile(path)


def _property_for(key: str, value: Any) -> dict[str, Any]:
    prop: dict[str, Any]
    if isinstance(value, list):
        prop = {"type": "array", "items": {"type": "string"}}
    elif isinstance(value, bool):
        prop = {"type": "boolean"}
    elif key == "testKeyword":
        prop = {"type": "string", "enum": list(TEST_KEYWORDS)}
    else:
        prop = {"type": "string"}
    if key in _DESCRIPTIONS:
        prop["description"] = _DESCRIPTIONS[key]
    prop["default"] = value
    return prop


def build_schema(defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Derive the draft-07 config schema from the packaged default config."""
    return {
        "$schema": DRAFT_07,
        "title": "testweaver Configuration",
        "description": (
            "Schema for the testweaver CLI configuration file (default.json or testweaver.json).\n"
            "This schema provides autocompletion and validation in compatible IDEs."
        ),
        "type": "object",
        "properties": {key: _property_for(key, value) for key, value in defaults.items()},
        "additionalProperties": False,
        "required": list(defaults),
    }
