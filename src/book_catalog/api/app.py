"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, services and
lifespan events into a single ``FastAPI`` instance.  It is the only
place that touches ``FastAPI`` directly.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from book_catalog.api.middleware.errors import unhandled_exception_handler
from book_catalog.api.middleware.request_id import RequestIDMiddleware
from book_catalog.api.middleware.timing import TimingMiddleware
from book_catalog.core.logging import configure_logging, get_logger
from book_catalog.core.settings import BookCatalogSettings, get_settings
from book_catalog.services import CatalogServices, build_services

log = get_logger("book_catalog.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    settings: BookCatalogSettings = app.state.settings
    log.info(
        "book-catalog API starting",
        version=app.version,
        store_backend=settings.store_backend,
    )
    yield
    log.info("book-catalog API shutting down")


def create_app(
    *,
    settings: BookCatalogSettings | None = None,
    services: CatalogServices | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : BookCatalogSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    services : CatalogServices | None
        Pre-built collaborators (fake stores in tests).  When ``None``
        they are built from *settings*.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.state.services = services or build_services(settings)

    # Override DI so endpoints use the provided settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (innermost → outermost) ────────────────────────────
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["OPTIONS", "GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from book_catalog.api.routers import books, cast, health

    prefix = settings.api_prefix

    app.include_router(health.router, tags=["health"])
    app.include_router(books.router, prefix=prefix, tags=["books"])
    app.include_router(cast.router, prefix=prefix, tags=["cast"])

    return app
