from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from marc_import.cli.utils import load_input, load_setup
from marc_import.loader import ControlField, DataField, Leader

console = Console()


def inspect_command(
    source: Path = typer.Argument(..., exists=True, readable=True),
    index: int = typer.Option(
        0,
        "--record",
        "-r",
        min=0,
        help="Position of the record in the input (0-based)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        readable=True,
        help="Alternative YAML configuration",
    ),
    unmapped: bool = typer.Option(
        False,
        "--unmapped",
        help="Also list subfields without a mapping rule",
    ),
):
    """
    Show which mapping rule handles each field of a record.
    """
    _, table = load_setup(config)
    records, _, _ = load_input(source)

    if index >= len(records):
        console.print(f"[red]Input has {len(records)} record(s); no record at position {index}[/red]")
        raise typer.Exit(code=1)

    record = records[index]

    out = Table(title=f"Record {index}: rule resolution")
    out.add_column("Field", style="bold")
    out.add_column("Value")
    out.add_column("Handler")
    out.add_column("Output field")
    out.add_column("Filter")

    mapped = skipped = 0
    for field in record:
        if isinstance(field, Leader):
            out.add_row("leader", escape(field.value), "(leader)", "type / status", "")
            continue

        if isinstance(field, ControlField):
            entries = [(field.tag, "", field.value)]
        elif isinstance(field, DataField):
            label = f"{field.tag} {field.ind1}{field.ind2}".rstrip()
            entries = [(f"{label} ${sf.code}", sf.code, sf.value) for sf in field.subfields]
        else:
            out.add_row(f"[red]{field.field_class}[/red]", "", "(unknown class)", "", "")
            continue

        for name, code, value in entries:
            rule = table.lookup(field.field_class, field.tag, code)
            if rule is None:
                skipped += 1
                if unmapped:
                    out.add_row(name, escape(value), "[dim]-[/dim]", "", "")
                continue
            mapped += 1
            out.add_row(name, escape(value), rule.handler, rule.fieldname or "(handler)", rule.filter or "")

    console.print(out)
    console.print(f"{mapped} mapped, {skipped} without rule")
