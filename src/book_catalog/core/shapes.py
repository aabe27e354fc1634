"""
Named shapes and the schema validator.

A *shape* is a pydantic model registered under a name.  The validator
checks plain mappings (request bodies, query parameters) against a shape
and reports every problem it finds, not just the first.

Validation is strict: ``"7"`` is not an integer, ``true`` is not an
integer, ``7`` is not a string.  The validator never returns the coerced
model; callers keep working with the original mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, PositiveInt, ValidationError


class BookShape(BaseModel):
    """A book record.  Attributes not named here are allowed."""

    model_config = ConfigDict(extra="allow", strict=True)

    id: PositiveInt | None = None
    title: str
    user_id: str | None = None
    overview: str | None = None
    translations: dict[str, dict[str, str]] | None = None


class BookCastMemberQueryParamsShape(BaseModel):
    """Query parameters accepted by the cast-member lookup.

    Other parameters are allowed and play no part in the lookup.
    """

    model_config = ConfigDict(extra="allow", strict=True)

    bookId: str
    name: str | None = None
    roleName: str | None = None


DEFAULT_SHAPES: dict[str, type[BaseModel]] = {
    "Book": BookShape,
    "BookCastMemberQueryParams": BookCastMemberQueryParamsShape,
}


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Result of validating one candidate.

    Attributes:
        valid: ``True`` when the candidate matches the shape.
        diagnostics: One ``{field, message, code}`` entry per problem.
    """

    valid: bool
    diagnostics: list[dict[str, Any]] = field(default_factory=list)


def _field_path(loc: tuple[Any, ...]) -> str | None:
    return ".".join(str(part) for part in loc) or None


class SchemaValidator:
    """Validate mappings against named shapes."""

    def __init__(self, shapes: Mapping[str, type[BaseModel]] | None = None) -> None:
        self._shapes = dict(shapes if shapes is not None else DEFAULT_SHAPES)

    @property
    def shape_names(self) -> list[str]:
        return sorted(self._shapes)

    def describe(self, shape_name: str) -> dict[str, Any]:
        """JSON schema of a shape, for error responses and docs."""
        return self._shapes[shape_name].model_json_schema()

    def validate(self, candidate: Any, shape_name: str) -> ValidationOutcome:
        """Check *candidate* against the shape registered as *shape_name*.

        Raises:
            KeyError: no shape is registered under *shape_name*.
        """
        model = self._shapes[shape_name]

        if not isinstance(candidate, Mapping):
            return ValidationOutcome(
                valid=False,
                diagnostics=[{
                    "field": None,
                    "message": f"Expected an object matching {shape_name}",
                    "code": "object_type",
                }],
            )

        try:
            model.model_validate(dict(candidate))
        except ValidationError as exc:
            return ValidationOutcome(
                valid=False,
                diagnostics=[
                    {
                        "field": _field_path(err["loc"]),
                        "message": err["msg"],
                        "code": err["type"],
                    }
                    for err in exc.errors()
                ],
            )

        return ValidationOutcome(valid=True)
