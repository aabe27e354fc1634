"""Health router — liveness check at the root path."""

from __future__ import annotations

from fastapi import APIRouter

from book_catalog.api.deps import Settings

router = APIRouter()


@router.get("/health")
async def health(settings: Settings):
    """Liveness check; does not touch the record store."""
    return {"status": "ok", "service": "book-catalog", "version": settings.api_version}
