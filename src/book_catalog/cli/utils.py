"""
CLI utility helpers — output formatting and context construction.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from book_catalog.core.settings import get_settings
from book_catalog.ops.context import OperationContext
from book_catalog.ops.result import OperationResult
from book_catalog.services import build_services

console = Console()
err_console = Console(stderr=True)


def make_context() -> OperationContext:
    """Build an ``OperationContext`` for CLI commands from the current settings."""
    return build_services(get_settings()).context(caller="cli")


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal.

    ``as_json`` prints the whole result envelope (data, timing and
    metadata such as the cast lookup plan).
    """
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code.value if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}")
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps(result.to_dict(), default=str))
        return

    data = result.data

    if isinstance(data, list) and not data:
        console.print("[dim]No items.[/dim]")
    elif isinstance(data, list):
        _print_table(data, title=title)
    else:
        _print_dict(data or {}, title=title)

    for key, value in result.metadata.items():
        console.print(f"{key}: {_cell(value)}", style="dim", markup=False)


# ── Private helpers ──────────────────────────────────────────────────────


def _cell(value: Any) -> str:
    if isinstance(value, dict | list):
        return json.dumps(value, default=str)
    return "" if value is None else str(value)


def _print_table(items: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table (columns = union of keys)."""
    columns: list[str] = []
    for item in items:
        columns.extend(k for k in item if k not in columns)

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    table = Table(title=title or None, show_header=False, pad_edge=False)
    table.add_column("key", style="bold")
    table.add_column("value", overflow="fold")
    for key, value in data.items():
        table.add_row(str(key), _cell(value))
    console.print(table)
