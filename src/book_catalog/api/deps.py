"""
FastAPI dependency injection — shared services and per-request contexts.

Usage in routers::

    from book_catalog.api.deps import OpContext

    @router.get("/books/{book_id}")
    async def get_book(ctx: OpContext, book_id: str):
        ...

Services (stores, validator, resolver, translator) are built once by
``create_app`` and stored on ``app.state``; every request gets a fresh
:class:`OperationContext` carrying the request's credential.
"""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Request

from book_catalog.core.identity import extract_credential
from book_catalog.core.settings import BookCatalogSettings, get_settings
from book_catalog.ops.context import OperationContext
from book_catalog.services import CatalogServices

# ── Services (built once per app) ────────────────────────────────────────


def get_services(request: Request) -> CatalogServices:
    """Services attached to the running app."""
    return request.app.state.services


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    services: Annotated[CatalogServices, Depends(get_services)],
    settings: Annotated[BookCatalogSettings, Depends(get_settings)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return services.context(
        credential=extract_credential(request.headers, request.cookies, settings.token_cookie),
        request_id=request_id,
        caller="api",
    )


# ── Convenience type aliases ─────────────────────────────────────────────

Settings = Annotated[BookCatalogSettings, Depends(get_settings)]
OpContext = Annotated[OperationContext, Depends(get_operation_context)]
