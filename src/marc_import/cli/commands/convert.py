from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from marc_import.cli.utils import convert_records, load_input, load_setup, records_payload, write_json

console = Console()


def convert_command(
    source: Path = typer.Argument(..., exists=True, readable=True, help="MARC21 XML file or saved SRU response"),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        readable=True,
        help="Alternative YAML configuration",
    ),
    first: bool = typer.Option(
        False,
        "--first",
        help="Convert only the first record",
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        help="Skip the reconciliation pass (provisional lists stay visible)",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Convert MARC records to deposit records as JSON (stdout by default).
    """
    cfg, table = load_setup(config)
    records, total, _ = load_input(source, verbose=verbose)
    if first:
        records = records[:1]

    results = convert_records(records, cfg, table, finalize=not raw)

    if verbose:
        flagged = sum(1 for r in results if r.suggestions)
        console.log(f"Converted {len(results)} record(s), {flagged} with suggestions")

    write_json(records_payload(results, total), out=out, pretty=pretty)

    if verbose and out:
        console.log(f"Export complete: {out}")
