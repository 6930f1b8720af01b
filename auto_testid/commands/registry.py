"""Command registry for dynamic dispatch of file commands."""

import importlib
import pkgutil
from pathlib import Path
from typing import Any, Dict, Type

from auto_testid.commands.base import BaseCommand

_registry: Dict[str, Type[BaseCommand]] = {}


def register_command(command_class: Type[BaseCommand]) -> Type[BaseCommand]:
    """Register a command class.

    Usable as a class decorator.

    Args:
        command_class: The command class to register

    Returns:
        The command class, unchanged

    Raises:
        ValueError: If command_class doesn't have a name attribute
    """
    if not hasattr(command_class, "name"):
        raise ValueError(f"Command class {command_class.__name__} must have a 'name' attribute")
    _registry[command_class.name] = command_class
    return command_class


def get_command(name: str) -> Type[BaseCommand]:
    """Get a command class by name.

    Raises:
        ValueError: If command is not registered
    """
    if name not in _registry:
        raise ValueError(f"Unknown command: {name}")
    return _registry[name]


def discover_and_register_commands() -> None:
    """Import every module in the commands package.

    Each command module registers its command class at import time through
    the register_command decorator.
    """
    commands_dir = Path(__file__).parent
    for module_info in pkgutil.iter_modules([str(commands_dir)]):
        if module_info.name.startswith("_") or module_info.name in ("base", "registry"):
            continue
        importlib.import_module(f"auto_testid.commands.{module_info.name}")


def apply_command(command: str, file_path: Path, **params: Any) -> BaseCommand:
    """Run a command on a file using the registry.

    Args:
        command: Name of the command to run
        file_path: Path to the source file
        **params: Additional parameters for the command

    Returns:
        The executed command instance, for callers that read its results

    Raises:
        ValueError: If the command is unknown or the file/parameters are invalid
    """
    command_class = get_command(command)
    instance = command_class(file_path, **params)
    instance.validate()
    instance.execute()
    return instance
