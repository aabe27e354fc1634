"""
CLI: ``book-catalog books`` — read-only catalog inspection.
"""

from __future__ import annotations

import asyncio

import typer

from book_catalog.cli.utils import make_context, output_result
from book_catalog.ops import books as book_ops
from book_catalog.ops.cast import list_cast_members

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_books(as_json: bool = typer.Option(False, "--json", help="Output JSON")) -> None:
    """List all books."""
    result = asyncio.run(book_ops.list_books(make_context()))
    output_result(result, as_json=as_json, title="Books")


@app.command("get")
def get_book(
    book_id: str = typer.Argument(..., help="Book ID"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Show one book."""
    result = asyncio.run(book_ops.get_book(make_context(), book_id))
    output_result(result, as_json=as_json, title=f"Book {book_id}")


@app.command("cast")
def cast(
    book_id: str = typer.Argument(..., help="Book ID"),
    name: str | None = typer.Option(None, "--name", help="Name prefix"),
    role: str | None = typer.Option(None, "--role", help="Role name prefix (wins over --name)"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """List cast members of a book."""
    params = {}
    if role is not None:
        params["roleName"] = role
    if name is not None:
        params["name"] = name
    result = asyncio.run(list_cast_members(make_context(), book_id, params))
    output_result(result, as_json=as_json, title=f"Cast of book {book_id}")
