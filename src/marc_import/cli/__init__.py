"""
CLI package for marc_import.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from marc_import.cli.app import app, main

__all__ = [
    "app",
    "main",
]
