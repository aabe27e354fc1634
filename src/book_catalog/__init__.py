"""
book-catalog — REST backend for a book catalog.

Books carry an owner (``user_id``) that gates updates and deletes, and a
``translations`` map that is filled lazily, one language at a time, the
first time a translation is requested.

Layers:
    - ``book_catalog.core``: identity, shapes, record stores, translation
    - ``book_catalog.ops``: request-handling operations (transport-free)
    - ``book_catalog.api``: FastAPI transport
    - ``book_catalog.cli``: Typer CLI (serve, seed, config)
"""

__version__ = "0.3.0"
