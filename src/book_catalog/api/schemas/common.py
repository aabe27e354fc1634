"""
Common API schemas — shared envelopes and RFC 7807 errors.

Every endpoint returns either :class:`SuccessResponse` (200/201)
or :class:`ProblemDetail` (4xx/5xx).

Error Codes:
    - ``MISSING_CREDENTIAL`` / ``INVALID_CREDENTIAL`` (401)
    - ``MISSING_IDENTIFIER`` / ``INVALID_BOOK_ID`` / ``MISSING_PARAMETER`` (400)
    - ``VALIDATION_FAILED`` (400): body or query failed its shape
    - ``FORBIDDEN`` (403): caller does not own the book
    - ``NOT_FOUND`` (404)
    - ``UPSTREAM_TRANSLATION_ERROR`` (502)
    - ``STORE_ERROR`` / ``INTERNAL`` (500)
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Field-level error detail (one per validation diagnostic)."""

    code: str = Field(description="Machine-readable error code (e.g., 'missing', 'string_type')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Example:
        {
            "type": "about:blank",
            "title": "You are not authorized to update this book",
            "status": 403,
            "code": "FORBIDDEN",
            "detail": "",
            "instance": "/books/7",
            "errors": []
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code")
    code: str | None = Field(default=None, description="Stable failure kind")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(
        default_factory=list,
        description="List of field-level error details",
    )


class SuccessResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    data: T = Field(description="Response payload (type varies by endpoint)")
    elapsed_ms: float = Field(default=0.0, description="Server-side processing time in milliseconds")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Operation metadata, e.g. translation cache hit/miss or the cast lookup plan",
    )
