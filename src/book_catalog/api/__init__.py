"""
REST API layer for the book catalog.

Provides a FastAPI application factory whose endpoints delegate to the
operations layer (``book_catalog.ops``).  This package handles only HTTP
concerns: serialisation, credential extraction, error mapping, and
request context.

Quick start::

    from book_catalog.api import create_app

    app = create_app()  # ready for uvicorn
"""

from book_catalog.api.app import create_app

__all__ = ["create_app"]
