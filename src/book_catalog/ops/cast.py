"""
Cast-member lookup.

:func:`build_lookup` turns the ``bookId`` path segment and optional
filters into exactly one :class:`LookupPlan`:

1. ``roleName`` given → role index, ``begins_with(roleName, …)``
2. else ``name`` given → primary ordering, ``begins_with(name, …)``
3. else → whole ``bookId`` partition

The rules are checked in that order and never combined.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from book_catalog.core.errors import ErrorCode, InvalidBookIdError, ShapeValidationError
from book_catalog.core.logging import get_logger
from book_catalog.core.shapes import SchemaValidator
from book_catalog.core.store.base import RangeCondition
from book_catalog.ops.context import OperationContext
from book_catalog.ops.identifiers import parse_book_id
from book_catalog.ops.result import OperationResult, start_timer

logger = get_logger(__name__)

CAST_QUERY_SHAPE = "BookCastMemberQueryParams"
PARTITION_KEY = "bookId"


@dataclass(frozen=True, slots=True)
class LookupPlan:
    """Fully resolved cast-member query."""

    partition_value: int
    index_name: str | None = None
    range_condition: RangeCondition | None = None
    partition_key: str = PARTITION_KEY

    def describe(self) -> dict[str, Any]:
        plan: dict[str, Any] = {
            "partition": {self.partition_key: self.partition_value},
            "index": self.index_name,
        }
        if self.range_condition is not None:
            plan["range"] = {
                "attribute": self.range_condition.attribute,
                "operator": self.range_condition.operator,
                "value": self.range_condition.value,
            }
        return plan


def build_lookup(
    book_id: Any,
    query_params: Mapping[str, Any] | None,
    validator: SchemaValidator,
    role_index: str = "roleIx",
) -> LookupPlan:
    """Build the lookup plan for a cast-member query.

    Raises:
        InvalidBookIdError: *book_id* is not a positive integer.
        ShapeValidationError: the merged parameters fail the
            ``BookCastMemberQueryParams`` shape.
    """
    raw = "" if book_id is None else str(book_id)
    partition_value = parse_book_id(raw)
    if partition_value is None:
        raise InvalidBookIdError(f"Invalid bookId: {raw}")

    params = {**(query_params or {}), PARTITION_KEY: raw}
    outcome = validator.validate(params, CAST_QUERY_SHAPE)
    if not outcome.valid:
        raise ShapeValidationError(
            "Incorrect type. Must match Query parameters schema",
            shape=CAST_QUERY_SHAPE,
            diagnostics=outcome.diagnostics,
        )

    if "roleName" in params:
        return LookupPlan(
            partition_value=partition_value,
            index_name=role_index,
            range_condition=RangeCondition(attribute="roleName", value=params["roleName"]),
        )
    if "name" in params:
        return LookupPlan(
            partition_value=partition_value,
            range_condition=RangeCondition(attribute="name", value=params["name"]),
        )
    return LookupPlan(partition_value=partition_value)


async def list_cast_members(
    ctx: OperationContext,
    book_id: Any,
    query_params: Mapping[str, Any] | None = None,
) -> OperationResult[list[dict]]:
    """Return the cast members of a book, optionally filtered by name or role prefix."""
    timer = start_timer()

    try:
        plan = build_lookup(book_id, query_params, ctx.validator, role_index=ctx.cast_role_index)
    except InvalidBookIdError as exc:
        return OperationResult.fail(exc.code, exc.message, elapsed_ms=timer.elapsed_ms)
    except ShapeValidationError as exc:
        return OperationResult.fail(
            exc.code,
            exc.message,
            details={"shape": exc.shape, "diagnostics": exc.diagnostics},
            elapsed_ms=timer.elapsed_ms,
        )

    try:
        members = await ctx.cast.query(
            plan.partition_value,
            index_name=plan.index_name,
            range_condition=plan.range_condition,
        )
    except Exception as exc:
        logger.exception("store_call_failed", action="query cast", error=str(exc))
        return OperationResult.fail(
            ErrorCode.STORE_ERROR,
            f"Failed to query cast members: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )

    logger.debug("cast_lookup", plan=plan.describe(), count=len(members))
    return OperationResult.ok(
        members,
        elapsed_ms=timer.elapsed_ms,
        metadata={"plan": plan.describe()},
    )
