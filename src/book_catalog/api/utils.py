"""
Shared API router utilities.

- ``_handle_error()`` — convert a failed OperationResult to a ``problem_response``
"""

from __future__ import annotations

from fastapi import Request

from book_catalog.api.middleware.errors import problem_response, status_for_error_code
from book_catalog.core.errors import ErrorCode
from book_catalog.ops.result import OperationResult


def _handle_error(result: OperationResult, request: Request | None = None):
    """Convert a failed ``OperationResult`` into a Problem Details response.

    Uses the error code from the result to determine the HTTP status code,
    the error message as the problem title, and validation diagnostics as
    the field-level ``errors`` list.
    """
    code = result.error.code if result.error else ErrorCode.INTERNAL
    details = result.error.details if result.error else {}
    return problem_response(
        status=status_for_error_code(code),
        title=result.error.message if result.error else "Operation failed",
        code=code.value,
        instance=str(request.url) if request is not None else "",
        errors=details.get("diagnostics"),
    )
