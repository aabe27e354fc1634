"""
Translation cache.

A book's ``translations`` attribute maps a language code to the book's
text attributes translated into that language.  The first request for a
language computes the entry and stores it; every later request returns
the stored entry as is.  Entries are never refreshed, even when the
source text changes.
"""

from __future__ import annotations

import asyncio
from typing import Any

from book_catalog.core.errors import ErrorCode
from book_catalog.core.logging import get_logger
from book_catalog.core.translation import Translator
from book_catalog.ops.context import OperationContext
from book_catalog.ops.identifiers import parse_book_id
from book_catalog.ops.result import OperationResult, start_timer

logger = get_logger(__name__)

TRANSLATIONS_FIELD = "translations"


async def translate_attributes(
    translator: Translator,
    book: dict[str, Any],
    language: str,
) -> dict[str, str]:
    """Translate every string-valued top-level attribute of *book*.

    Calls run concurrently in a task group.  The first failure cancels the
    calls still in flight and every failure is raised together as an
    ``ExceptionGroup``, so callers never see a partial result.
    """
    async with asyncio.TaskGroup() as group:
        tasks = {
            name: group.create_task(translator.translate(value, language))
            for name, value in book.items()
            if isinstance(value, str) and name != TRANSLATIONS_FIELD
        }
    return {name: task.result() for name, task in tasks.items()}


async def get_translated_book(
    ctx: OperationContext,
    book_id: Any,
    language: str | None,
) -> OperationResult[dict]:
    """Return a book with a ``translations[language]`` entry, computing it once."""
    timer = start_timer()

    key = parse_book_id(book_id)
    language = language.strip() if isinstance(language, str) else ""
    if key is None or not language:
        return OperationResult.fail(
            ErrorCode.MISSING_PARAMETER,
            "Book id and language query parameter are required",
            details={"bookId": None if book_id is None else str(book_id), "language": language or None},
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        book = await ctx.books.get({"id": key})
    except Exception as exc:
        logger.exception("store_call_failed", action="fetch book", error=str(exc))
        return OperationResult.fail(
            ErrorCode.STORE_ERROR, f"Failed to fetch book: {exc}", elapsed_ms=timer.elapsed_ms
        )

    if book is None:
        return OperationResult.fail(
            ErrorCode.NOT_FOUND, "Book not found", elapsed_ms=timer.elapsed_ms
        )

    translations = book.get(TRANSLATIONS_FIELD)
    if not isinstance(translations, dict):
        translations = {}

    if language in translations:
        logger.debug("translation_cache_hit", book_id=key, language=language)
        return OperationResult.ok(
            book, elapsed_ms=timer.elapsed_ms, metadata={"cache": "hit"}
        )

    try:
        translated = await translate_attributes(ctx.translator, book, language)
    except Exception as exc:
        failures = exc.exceptions if isinstance(exc, ExceptionGroup) else (exc,)
        logger.exception(
            "translation_failed",
            book_id=key,
            language=language,
            errors=[str(e) for e in failures],
        )
        return OperationResult.fail(
            ErrorCode.UPSTREAM_TRANSLATION_ERROR,
            "Error translating text",
            details={"language": language},
            elapsed_ms=timer.elapsed_ms,
        )

    merged = {**translations, language: translated}
    try:
        await ctx.books.update_partial({"id": key}, {TRANSLATIONS_FIELD: merged})
    except Exception as exc:
        logger.exception("store_call_failed", action="store translation", error=str(exc))
        return OperationResult.fail(
            ErrorCode.STORE_ERROR, f"Failed to store translation: {exc}", elapsed_ms=timer.elapsed_ms
        )

    logger.info(
        "translation_cached",
        book_id=key,
        language=language,
        attributes=sorted(translated),
    )
    return OperationResult.ok(
        {**book, TRANSLATIONS_FIELD: merged},
        elapsed_ms=timer.elapsed_ms,
        metadata={"cache": "miss"},
    )
