"""
Error handling — maps ops-layer error codes to RFC 7807 responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from book_catalog.api.schemas.common import ErrorDetail, ProblemDetail
from book_catalog.core.errors import ErrorCode
from book_catalog.core.logging import get_logger

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.MISSING_CREDENTIAL: 401,
    ErrorCode.INVALID_CREDENTIAL: 401,
    ErrorCode.MISSING_IDENTIFIER: 400,
    ErrorCode.INVALID_BOOK_ID: 400,
    ErrorCode.MISSING_PARAMETER: 400,
    ErrorCode.VALIDATION_FAILED: 400,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UPSTREAM_TRANSLATION_ERROR: 502,
    ErrorCode.STORE_ERROR: 500,
    ErrorCode.INTERNAL: 500,
}


def status_for_error_code(code: ErrorCode | str) -> int:
    """Resolve an ops error code to HTTP status, defaulting to 500."""
    try:
        return ERROR_CODE_TO_STATUS.get(ErrorCode(code), 500)
    except ValueError:
        return 500


def problem_response(
    *,
    status: int,
    title: str,
    code: str | None = None,
    detail: str = "",
    instance: str = "",
    errors: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(
        title=title,
        status=status,
        code=code,
        detail=detail,
        instance=instance,
    )
    if errors:
        body.errors = [
            ErrorDetail(
                code=str(e.get("code", "invalid")),
                message=str(e.get("message", "")),
                field=e.get("field"),
            )
            for e in errors
        ]
    return JSONResponse(status_code=status, content=body.model_dump())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — returns 500 with ProblemDetail."""
    logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
    return problem_response(
        status=500,
        title="Internal Server Error",
        code=ErrorCode.INTERNAL.value,
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=str(request.url),
    )
