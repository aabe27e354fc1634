"""
Seed loading.

Bulk-writes books and cast members into their tables, the way the
catalog is provisioned before first use.  Records are written as given
(seeded books keep whatever ``user_id`` the seed file carries); records
missing their key attributes are rejected before anything is written.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from book_catalog.core.errors import ErrorCode
from book_catalog.core.logging import get_logger
from book_catalog.core.store.base import RecordStore
from book_catalog.ops.context import OperationContext
from book_catalog.ops.result import OperationResult, start_timer

logger = get_logger(__name__)


def load_seed_file(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of records.

    Raises:
        ValueError: the file does not hold a JSON array of objects.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError(f"{path}: expected a JSON array of objects")
    return data


def _missing_keys(store: RecordStore, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    problems = []
    for index, record in enumerate(records):
        missing = [name for name in store.key_attributes if record.get(name) is None]
        if missing:
            problems.append({"index": index, "missing": missing})
    return problems


async def seed_catalog(
    ctx: OperationContext,
    books: list[dict[str, Any]],
    cast_members: list[dict[str, Any]] | None = None,
) -> OperationResult[dict]:
    """Write seed books and cast members."""
    timer = start_timer()
    cast_members = cast_members or []

    problems = {
        "books": _missing_keys(ctx.books, books),
        "cast": _missing_keys(ctx.cast, cast_members),
    }
    if problems["books"] or problems["cast"]:
        return OperationResult.fail(
            ErrorCode.VALIDATION_FAILED,
            "Seed records are missing key attributes",
            details={k: v for k, v in problems.items() if v},
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        book_count = await ctx.books.batch_put(books)
        cast_count = await ctx.cast.batch_put(cast_members)
    except Exception as exc:
        logger.exception("seed_failed", error=str(exc))
        return OperationResult.fail(
            ErrorCode.STORE_ERROR,
            f"Failed to write seed data: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )

    logger.info("catalog_seeded", books=book_count, cast=cast_count)
    return OperationResult.ok(
        {"books": book_count, "cast": cast_count},
        elapsed_ms=timer.elapsed_ms,
    )
