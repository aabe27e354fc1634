"""
CLI: ``book-catalog serve`` — start the API server.
"""

from __future__ import annotations

import typer
import uvicorn

from book_catalog.cli.utils import console
from book_catalog.core.settings import get_settings


def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address [default: BOOKS_HOST]"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port [default: BOOKS_PORT]"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of workers"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the book-catalog REST API server."""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting book-catalog API[/bold green] on {host}:{port}")
    uvicorn.run(
        "book_catalog.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )
