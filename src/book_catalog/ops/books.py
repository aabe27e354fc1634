"""
Book operations.

Create, read, list, update and delete books.  Update and delete are
ownership-gated: the caller's identity is decoded from the request
credential and its subject must equal the stored ``user_id`` exactly.

Update is a partial write: every top-level key in the body is set on the
stored record in one ``update_partial`` call; keys not in the body stay
as they are.  The fetch / owner check / write sequence is not
transactional.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from book_catalog.core.errors import AuthError, ErrorCode
from book_catalog.core.identity import Identity
from book_catalog.core.logging import get_logger
from book_catalog.ops.context import OperationContext
from book_catalog.ops.identifiers import parse_book_id
from book_catalog.ops.result import OperationResult, _Timer, start_timer
from book_catalog.ops.translations import TRANSLATIONS_FIELD

logger = get_logger(__name__)

BOOK_SHAPE = "Book"
OWNER_FIELD = "user_id"

# Never taken from a client body; translations are only written by the cache
SERVER_OWNED_FIELDS = frozenset({OWNER_FIELD, TRANSLATIONS_FIELD})

# Never taken from a client body on update
IMMUTABLE_FIELDS = SERVER_OWNED_FIELDS | {"id"}


# ------------------------------------------------------------------ #
# Shared failure helpers
# ------------------------------------------------------------------ #


def _resolve(ctx: OperationContext) -> Identity | AuthError:
    try:
        return ctx.resolver.resolve(ctx.credential)
    except AuthError as exc:
        return exc


def _auth_failure(exc: AuthError, timer: _Timer) -> OperationResult[Any]:
    logger.info("credential_rejected", code=exc.code.value)
    return OperationResult.fail(exc.code, exc.message, elapsed_ms=timer.elapsed_ms)


def _store_failure(action: str, exc: Exception, timer: _Timer) -> OperationResult[Any]:
    logger.exception("store_call_failed", action=action, error=str(exc))
    return OperationResult.fail(
        ErrorCode.STORE_ERROR,
        f"Failed to {action}: {exc}",
        elapsed_ms=timer.elapsed_ms,
    )


def _validation_failure(
    diagnostics: list[dict[str, Any]],
    timer: _Timer,
    message: str = "Incorrect type. Must match Book schema",
) -> OperationResult[Any]:
    return OperationResult.fail(
        ErrorCode.VALIDATION_FAILED,
        message,
        details={"shape": BOOK_SHAPE, "diagnostics": diagnostics},
        elapsed_ms=timer.elapsed_ms,
    )


def _missing_identifier(raw: Any, timer: _Timer) -> OperationResult[Any]:
    return OperationResult.fail(
        ErrorCode.MISSING_IDENTIFIER,
        "Missing or invalid book ID",
        details={"bookId": None if raw is None else str(raw)},
        elapsed_ms=timer.elapsed_ms,
    )


# ------------------------------------------------------------------ #
# Reads
# ------------------------------------------------------------------ #


async def get_book(ctx: OperationContext, book_id: Any) -> OperationResult[dict]:
    """Fetch one book by id."""
    timer = start_timer()

    key = parse_book_id(book_id)
    if key is None:
        return _missing_identifier(book_id, timer)

    try:
        book = await ctx.books.get({"id": key})
    except Exception as exc:
        return _store_failure("get book", exc, timer)

    if book is None:
        return OperationResult.fail(
            ErrorCode.NOT_FOUND,
            f"No book found with id {key}",
            elapsed_ms=timer.elapsed_ms,
        )

    return OperationResult.ok(book, elapsed_ms=timer.elapsed_ms)


async def list_books(ctx: OperationContext) -> OperationResult[list[dict]]:
    """Return every book, ordered by id."""
    timer = start_timer()

    try:
        books = await ctx.books.scan()
    except Exception as exc:
        return _store_failure("list books", exc, timer)

    books.sort(key=lambda b: b.get("id", 0))
    return OperationResult.ok(books, elapsed_ms=timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Mutations
# ------------------------------------------------------------------ #


async def create_book(ctx: OperationContext, body: Any) -> OperationResult[dict]:
    """Create (or overwrite) a book owned by the caller.

    Any ``user_id`` in the body is discarded and replaced with the
    caller's subject before validation.  A ``translations`` map in the
    body is discarded too.
    """
    timer = start_timer()

    identity = _resolve(ctx)
    if isinstance(identity, AuthError):
        return _auth_failure(identity, timer)

    if not isinstance(body, Mapping):
        return _validation_failure(
            [{"field": None, "message": "Missing request body", "code": "missing"}],
            timer,
            message="Missing request body",
        )

    record = {k: v for k, v in body.items() if k not in SERVER_OWNED_FIELDS}
    record[OWNER_FIELD] = identity.sub

    outcome = ctx.validator.validate(record, BOOK_SHAPE)
    diagnostics = list(outcome.diagnostics)
    if record.get("id") is None:
        diagnostics.append({"field": "id", "message": "Field required", "code": "missing"})
    if diagnostics:
        logger.info("book_create_rejected", diagnostics=len(diagnostics))
        return _validation_failure(diagnostics, timer)

    try:
        await ctx.books.put(record)
    except Exception as exc:
        return _store_failure("create book", exc, timer)

    logger.info("book_created", book_id=record["id"], user_id=identity.sub)
    return OperationResult.ok(
        {"id": record["id"], OWNER_FIELD: identity.sub, "created": True},
        elapsed_ms=timer.elapsed_ms,
    )


async def update_book(
    ctx: OperationContext,
    book_id: Any,
    body: Any,
) -> OperationResult[dict]:
    """Apply a partial update to a book the caller owns.

    The body (minus ``id``, ``user_id`` and ``translations``) is validated
    against the full ``Book`` shape, so shape-required fields must be
    supplied even though only the supplied keys are written.
    """
    timer = start_timer()

    key = parse_book_id(book_id)
    if key is None:
        return _missing_identifier(book_id, timer)

    if isinstance(body, Mapping):
        changes: Any = {k: v for k, v in body.items() if k not in IMMUTABLE_FIELDS}
    else:
        changes = body

    outcome = ctx.validator.validate(changes, BOOK_SHAPE)
    if not outcome.valid:
        logger.info("book_update_rejected", book_id=key, diagnostics=len(outcome.diagnostics))
        return _validation_failure(outcome.diagnostics, timer, message="Invalid request body")

    identity = _resolve(ctx)
    if isinstance(identity, AuthError):
        return _auth_failure(identity, timer)

    try:
        existing = await ctx.books.get({"id": key})
    except Exception as exc:
        return _store_failure("fetch book", exc, timer)

    if existing is None:
        return OperationResult.fail(
            ErrorCode.NOT_FOUND, "Book not found", elapsed_ms=timer.elapsed_ms
        )

    if existing.get(OWNER_FIELD) != identity.sub:
        logger.warning("book_update_forbidden", book_id=key, user_id=identity.sub)
        return OperationResult.fail(
            ErrorCode.FORBIDDEN,
            "You are not authorized to update this book",
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        updated = await ctx.books.update_partial({"id": key}, changes)
    except Exception as exc:
        return _store_failure("update book", exc, timer)

    logger.info("book_updated", book_id=key, user_id=identity.sub, fields=sorted(changes))
    return OperationResult.ok(
        {"id": key, OWNER_FIELD: identity.sub, "updated": True, "book": updated},
        elapsed_ms=timer.elapsed_ms,
    )


async def delete_book(ctx: OperationContext, book_id: Any) -> OperationResult[dict]:
    """Delete a book the caller owns."""
    timer = start_timer()

    key = parse_book_id(book_id)
    if key is None:
        return _missing_identifier(book_id, timer)

    identity = _resolve(ctx)
    if isinstance(identity, AuthError):
        return _auth_failure(identity, timer)

    try:
        existing = await ctx.books.get({"id": key})
    except Exception as exc:
        return _store_failure("fetch book", exc, timer)

    if existing is None:
        return OperationResult.fail(
            ErrorCode.NOT_FOUND, "Book not found", elapsed_ms=timer.elapsed_ms
        )

    if existing.get(OWNER_FIELD) != identity.sub:
        logger.warning("book_delete_forbidden", book_id=key, user_id=identity.sub)
        return OperationResult.fail(
            ErrorCode.FORBIDDEN,
            "You are not authorized to delete this book",
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        await ctx.books.delete({"id": key})
    except Exception as exc:
        return _store_failure("delete book", exc, timer)

    logger.info("book_deleted", book_id=key, user_id=identity.sub)
    return OperationResult.ok({"id": key, "deleted": True}, elapsed_ms=timer.elapsed_ms)
