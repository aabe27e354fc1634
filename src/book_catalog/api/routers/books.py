"""
Books router — CRUD and on-demand translation.

Endpoints:
    POST   /books                           Create a book owned by the caller
    GET    /books                           List all books
    GET    /books/{bookId}                  Get one book
    PUT    /books/{bookId}                  Partially update a book (owner only)
    DELETE /books/{bookId}                  Delete a book (owner only)
    GET    /books/{bookId}/translation      Book with a translated entry for ?language=

The caller's identity comes from the ``Authorization`` header or the
``token`` cookie.  ``bookId`` is taken as a raw string so malformed ids
are reported as ``MISSING_IDENTIFIER`` rather than a framework 422.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Path, Query, Request

from book_catalog.api.deps import OpContext
from book_catalog.api.schemas.common import SuccessResponse
from book_catalog.api.utils import _handle_error
from book_catalog.ops import books as book_ops
from book_catalog.ops.translations import get_translated_book

router = APIRouter(prefix="/books")


@router.post("", status_code=201)
async def create_book(
    request: Request,
    ctx: OpContext,
    body: Any = Body(None, description="Book attributes; user_id is ignored"),
):
    """Create a book.

    The owner is always the caller; a ``user_id`` in the body is ignored.
    A book with an existing id is overwritten.
    """
    result = await book_ops.create_book(ctx, body)

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=result.data, elapsed_ms=result.elapsed_ms, metadata=result.metadata
    )


@router.get("")
async def list_books(request: Request, ctx: OpContext):
    """List every book."""
    result = await book_ops.list_books(ctx)

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=result.data, elapsed_ms=result.elapsed_ms, metadata=result.metadata
    )


@router.get("/{book_id}")
async def get_book(
    request: Request,
    ctx: OpContext,
    book_id: str = Path(..., description="Book ID"),
):
    """Get a book by id."""
    result = await book_ops.get_book(ctx, book_id)

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=result.data, elapsed_ms=result.elapsed_ms, metadata=result.metadata
    )


@router.put("/{book_id}")
async def update_book(
    request: Request,
    ctx: OpContext,
    book_id: str = Path(..., description="Book ID"),
    body: Any = Body(None, description="Attributes to set"),
):
    """Partially update a book.

    Only the keys in the body are written.  The body must still satisfy
    the full ``Book`` shape.  Only the owner may update.
    """
    result = await book_ops.update_book(ctx, book_id, body)

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=result.data, elapsed_ms=result.elapsed_ms, metadata=result.metadata
    )


@router.delete("/{book_id}")
async def delete_book(
    request: Request,
    ctx: OpContext,
    book_id: str = Path(..., description="Book ID"),
):
    """Delete a book.  Only the owner may delete."""
    result = await book_ops.delete_book(ctx, book_id)

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=result.data, elapsed_ms=result.elapsed_ms, metadata=result.metadata
    )


@router.get("/{book_id}/translation")
async def translate_book(
    request: Request,
    ctx: OpContext,
    book_id: str = Path(..., description="Book ID"),
    language: str | None = Query(None, description="Target language code, e.g. 'fr'"),
):
    """Get a book with its text attributes translated into ``language``.

    The translation is computed on the first request for a language and
    served from the book's ``translations`` map afterwards.
    """
    result = await get_translated_book(ctx, book_id, language)

    if not result.success:
        return _handle_error(result, request)

    return SuccessResponse(
        data=result.data, elapsed_ms=result.elapsed_ms, metadata=result.metadata
    )
