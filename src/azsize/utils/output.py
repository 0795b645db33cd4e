from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from typing import Any, Literal

import typer
import yaml
from rich.console import Console
from rich.table import Table

from azsize.utils.serialization import to_plain_data

OutputFormat = Literal["table", "json", "yaml", "csv"]


def format_csv(header: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow(["" if cell is None else cell for cell in row])
    return buffer.getvalue()


def emit_csv(header: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    typer.echo(format_csv(header, rows), nl=False)


def emit(value: Any, *, output: OutputFormat = "json") -> None:
    """Render CLI output as json, yaml, csv or a generic table."""

    plain = to_plain_data(value)
    if output == "json":
        typer.echo(json.dumps(plain, indent=2))
        return
    if output == "yaml":
        typer.echo(yaml.safe_dump(plain, sort_keys=False), nl=False)
        return

    rows = plain if isinstance(plain, list) else None
    if output == "csv" and rows and all(isinstance(item, dict) for item in rows):
        keys = _collect_keys(rows)
        emit_csv(keys, [[row.get(key) for key in keys] for row in rows])
        return

    console = Console()
    if rows and all(isinstance(item, dict) for item in rows):
        keys = _collect_keys(rows)
        table = Table(show_header=True, header_style="bold")
        for key in keys:
            table.add_column(key)
        for row in rows:
            table.add_row(*[str(row.get(key, "")) for key in keys])
        console.print(table)
        return

    if isinstance(plain, dict):
        table = Table(show_header=True, header_style="bold")
        table.add_column("key")
        table.add_column("value")
        for key, val in plain.items():
            table.add_row(str(key), str(val))
        console.print(table)
        return

    console.print(str(plain))


def _collect_keys(rows: list[Any]) -> list[str]:
    keys: list[str] = []
    for row in rows:
        for key in row:
            key_str = str(key)
            if key_str not in keys:
                keys.append(key_str)
    return keys
