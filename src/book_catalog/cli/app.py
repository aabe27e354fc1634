"""
Root Typer application for the book-catalog CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="book-catalog",
    help="book-catalog — books, cast members and cached translations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from book_catalog import __version__

        typer.echo(f"book-catalog {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level to stderr."),
) -> None:
    """book-catalog CLI — serve the API, seed tables, inspect the catalog."""
    from book_catalog.core.logging import configure_logging

    configure_logging(level="DEBUG" if verbose else "WARNING", json_format=False)


# ── Sub-command registration ─────────────────────────────────────────────

from book_catalog.cli.books import app as books_app  # noqa: E402
from book_catalog.cli.config import app as config_app  # noqa: E402
from book_catalog.cli.seed import seed  # noqa: E402
from book_catalog.cli.serve import serve  # noqa: E402

app.command("serve")(serve)
app.command("seed")(seed)
app.add_typer(books_app, name="books", help="Inspect books and cast members.")
app.add_typer(config_app, name="config", help="Configuration inspection.")


if __name__ == "__main__":
    app()
