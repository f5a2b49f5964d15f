"""
Compatibility wrapper around the centralized logging package.

Prefer importing from ``marc_import.logging`` directly:
    from marc_import.logging import get_logger
"""

from marc_import.logging import get_logger, list_active_loggers, set_debug

__all__ = [
    "get_logger",
    "list_active_loggers",
    "set_debug",
]
