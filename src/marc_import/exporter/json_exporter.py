"""
json_exporter.py
JSON export for converted EPData records.

- EPData objects are exported through ``EPData.to_dict()`` (person entries
  become {"name": {"family", "given"}, "orcid"}, suggestions one string)
- Other values are converted recursively to JSON-compatible structures
- Output is deterministic: records keep input order, fields keep
  insertion order
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

from marc_import.epdata.record import EPData, PersonEntry
from marc_import.logger import get_logger

log = get_logger("json_exporter")


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - EPData / PersonEntry -> their own dict form
    - dataclasses -> dict (recursively)
    - dict -> dict, list / tuple / set -> list (recursively)
    - Anything else -> str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, (EPData, PersonEntry)):
        return _to_json_compatible(obj.to_dict())

    if is_dataclass(obj) and not isinstance(obj, type):
        return {k: _to_json_compatible(v) for k, v in asdict(obj).items()}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    return str(obj)


def build_records_dict(records: Iterable[EPData], total: int | None = None) -> Dict[str, Any]:
    items: List[Any] = [_to_json_compatible(r) for r in records]
    return {
        "count": len(items),
        "total": total if total is not None else len(items),
        "records": items,
    }


def serialize_records_to_json_string(records: Iterable[EPData], indent: int | None = 2, total: int | None = None) -> str:
    return json.dumps(
        build_records_dict(records, total=total),
        indent=indent,
        ensure_ascii=False,
    )


def export_records_json(
    records: Iterable[EPData],
    output_path: str | Path,
    indent: int | None = 2,
    total: int | None = None,
) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    records = list(records)
    with_suggestions = sum(1 for r in records if r.suggestions)

    log.info(
        "Exporting %d record(s) to: %s (%d with suggestions)",
        len(records),
        output_path,
        with_suggestions,
    )

    json_str = serialize_records_to_json_string(records, indent=indent, total=total)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
    return output_path
