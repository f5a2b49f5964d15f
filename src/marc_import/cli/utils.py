from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console

from marc_import.config import get_config, load_config
from marc_import.core.pipeline import load_records
from marc_import.epdata.record import EPData
from marc_import.exporter import build_records_dict
from marc_import.loader import CatalogRecord
from marc_import.mapping import MappingTable, build_mapping_table
from marc_import.walker import RecordWalker

console = Console()


def load_setup(config_path: Optional[Path] = None) -> Tuple[Any, MappingTable]:
    """Configuration plus a validated mapping table."""
    config = load_config(config_path) if config_path else get_config()
    return config, build_mapping_table(config)


def load_input(path: Path, *, verbose: bool = False) -> Tuple[List[CatalogRecord], int, List[str]]:
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()
    records, total, diagnostics = load_records(path)
    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded {len(records)} record(s) of {total} in {elapsed:.2f}s")
    for message in diagnostics:
        console.print(f"[yellow]SRU diagnostic:[/yellow] {message}")

    return records, total, diagnostics


def convert_records(
    records: List[CatalogRecord],
    config: Any,
    table: MappingTable,
    *,
    finalize: bool = True,
) -> List[EPData]:
    walker = RecordWalker(table, config)
    return [walker.convert(record, finalize=finalize) for record in records]


def write_json(
    data: Dict[str, Any],
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)


def records_payload(results: List[EPData], total: int) -> Dict[str, Any]:
    return build_records_dict(results, total=total)
