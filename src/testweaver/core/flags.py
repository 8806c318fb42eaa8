from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import typer

# Compared by name: Typer may bring its own copy of click's parameter classes.
OPTION_PARAM_TYPE = "option"


@dataclass(frozen=True)
class OptionDefinition:
    flags: tuple[str, ...]
    attribute_name: str
    takes_value: bool

    @classmethod
    def switch(cls, attribute_name: str, *flags: str) -> "OptionDefinition":
        return cls(flags=flags, attribute_name=attribute_name, takes_value=False)

    @classmethod
    def valued(cls, attribute_name: str, *flags: str) -> "OptionDefinition":
        return cls(flags=flags, attribute_name=attribute_name, takes_value=True)


def option_definitions(command: typer.core.TyperCommand | typer.core.TyperGroup) -> list[OptionDefinition]:
    """Describe the declared options of a Typer command or group."""
    definitions: list[OptionDefinition] = []
    for param in command.params:
        if getattr(param, "param_type_name", None) != OPTION_PARAM_TYPE or param.name is None:
            continue
        definitions.append(
            OptionDefinition(
                flags=tuple(param.opts) + tuple(param.secondary_opts),
                attribute_name=param.name,
                takes_value=not getattr(param, "is_flag", False),
            )
        )
    return definitions


def normalize(options: Mapping[str, Any], definitions: Iterable[OptionDefinition]) -> dict[str, Any]:
    """
    Return a copy of ``options`` where every absent boolean switch is False.

    Only missing keys are filled in; a key that is present keeps its value,
    even when that value is None.
    """
    normalized = dict(options)
    for definition in definitions:
        if definition.takes_value:
            continue
        if definition.attribute_name not in normalized:
            normalized[definition.attribute_name] = False
    return normalized
