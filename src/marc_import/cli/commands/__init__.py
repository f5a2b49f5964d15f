"""
CLI command modules for marc_import.

Each command module defines a single Typer-compatible command function.
"""

from marc_import.cli.commands.convert import convert_command
from marc_import.cli.commands.inspect import inspect_command

__all__ = [
    "convert_command",
    "inspect_command",
]
