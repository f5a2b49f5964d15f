"""
Exporter package.

Re-exports the JSON export entry points used by the pipeline and the CLI.
"""

from __future__ import annotations

from .json_exporter import build_records_dict, export_records_json, serialize_records_to_json_string

__all__ = [
    "build_records_dict",
    "export_records_json",
    "serialize_records_to_json_string",
]
