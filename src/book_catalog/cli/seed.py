"""
CLI: ``book-catalog seed`` — load seed books and cast members.
"""

from __future__ import annotations

import asyncio
from importlib.resources import files
from pathlib import Path

import typer

from book_catalog.cli.utils import console, err_console, make_context, output_result
from book_catalog.ops.seed import load_seed_file, seed_catalog

_PACKAGED = files("book_catalog") / "seed"


def seed(
    books: Path | None = typer.Option(None, "--books", "-b", help="JSON array of books"),
    cast: Path | None = typer.Option(None, "--cast", "-c", help="JSON array of cast members"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Write seed data into the configured tables.

    Without options, the sample data shipped with the package is used.
    """
    books_path = books or Path(str(_PACKAGED / "books.json"))
    cast_path = cast or Path(str(_PACKAGED / "cast.json"))

    try:
        book_records = load_seed_file(books_path)
        cast_records = load_seed_file(cast_path)
    except (OSError, ValueError) as e:
        err_console.print(f"[bold red]Error[/bold red]: {e}")
        raise typer.Exit(code=1) from e

    console.print(f"Seeding {len(book_records)} books and {len(cast_records)} cast members")
    result = asyncio.run(seed_catalog(make_context(), book_records, cast_records))
    output_result(result, as_json=as_json, title="Seeded")
