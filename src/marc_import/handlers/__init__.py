"""
Handler registry and the built-in MARC field handlers.

Importing this package registers every handler module below.
"""

from .registry import HANDLERS, Handler, get_handler, handler, handler_names

from . import basic, extent, hostitem, identifiers, persons, subjects, thesis  # noqa: F401  (registration)

__all__ = [
    "HANDLERS",
    "Handler",
    "get_handler",
    "handler",
    "handler_names",
]
