"""
Command discovery.

Every ``*.py`` file below the commands directory whose name does not start
with an underscore is a command module. A command module exposes exactly one
entry point, ``register(app)``, which attaches its subcommand(s) to the root
Typer app. Modules that fail to import or do not expose ``register`` are
skipped with a warning so one broken file cannot take the whole CLI down.
"""

from __future__ import annotations

import importlib
import importlib.util
import os
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Callable

import typer

from testweaver.core.logger import get_logger

log = get_logger("registry")

REGISTER_ATTRIBUTE = "register"
COMMAND_SUFFIX = ".py"

RegisterFn = Callable[[typer.Typer], None]


@dataclass(frozen=True)
class CommandModule:
    name: str
    path: Path
    register: RegisterFn


def _iter_command_files(directory: Path) -> list[Path]:
    found: list[Path] = []
    for entry in sorted(os.scandir(directory), key=lambda e: e.name):
        path = Path(entry.path)
        if entry.is_dir():
            if entry.name.startswith((".", "_")):
                continue
            found.extend(_iter_command_files(path))
        elif entry.is_file() and entry.name.endswith(COMMAND_SUFFIX) and not entry.name.startswith("_"):
            found.append(path)
    return found


def _module_name(root_dir: Path, path: Path) -> str:
    return ".".join(path.relative_to(root_dir).with_suffix("").parts)


def _import_file(name: str, path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"_testweaver_command_{name.replace('.', '_')}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load module from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def discover_commands(root_dir: str | Path, package: str | None = None) -> list[CommandModule]:
    root_dir = Path(root_dir)
    if not root_dir.is_dir():
        log.warning("commands directory not found: %s", root_dir)
        return []

    modules: list[CommandModule] = []
    for path in _iter_command_files(root_dir):
        name = _module_name(root_dir, path)
        try:
            if package:
                module = importlib.import_module(f"{package}.{name}")
            else:
                module = _import_file(name, path)
        except Exception as exc:  # noqa: BLE001
            log.warning("could not load command file '%s': %s. skipping.", path, exc)
            continue

        register = getattr(module, REGISTER_ATTRIBUTE, None)
        if not callable(register):
            log.warning("command file '%s' does not define a %s(app) function. skipping.", path, REGISTER_ATTRIBUTE)
            continue
        modules.append(CommandModule(name=name, path=path, register=register))
    return modules


def load_commands(app: typer.Typer, root_dir: str | Path, package: str | None = None) -> list[CommandModule]:
    registered: list[CommandModule] = []
    for command in discover_commands(root_dir, package):
        try:
            command.register(app)
        except Exception as exc:  # noqa: BLE001
            log.warning("command file '%s' failed to register: %s. skipping.", command.path, exc)
            continue
        log.debug("loaded command: %s", command.name)
        registered.append(command)
    return registered
