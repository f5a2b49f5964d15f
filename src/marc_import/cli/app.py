from __future__ import annotations

import typer

from marc_import.cli.commands.convert import convert_command
from marc_import.cli.commands.inspect import inspect_command

app = typer.Typer(
    name="marc-import",
    help="MARC21 record converter and rule inspector",
    add_completion=False,
)

app.command("convert")(convert_command)
app.command("inspect")(inspect_command)


def main():
    app()


if __name__ == "__main__":
    main()
