"""
Cast router — cast members of a book.

Endpoints:
    GET /books/{bookId}/cast            All cast members of a book
    GET /books/{bookId}/cast?name=Ja    Cast members whose name starts with "Ja"
    GET /books/{bookId}/cast?roleName=C Cast members whose role starts with "C"

When both filters are given, ``roleName`` wins.
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Request

from book_catalog.api.deps import OpContext
from book_catalog.api.schemas.common import SuccessResponse
from book_catalog.api.utils import _handle_error
from book_catalog.ops.cast import list_cast_members

router = APIRouter(prefix="/books")


@router.get("/{book_id}/cast")
async def get_cast_members(
    request: Request,
    ctx: OpContext,
    book_id: str = Path(..., description="Book ID"),
):
    """List cast members of a book, optionally filtered by name or role prefix.

    All query parameters are passed through to shape validation, so
    unknown filters are rejected.
    """
    result = await list_cast_members(ctx, book_id, dict(request.query_params))

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=result.data, elapsed_ms=result.elapsed_ms, metadata=result.metadata
    )
