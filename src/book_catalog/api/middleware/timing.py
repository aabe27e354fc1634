"""Request timing: ``X-Process-Time-Ms`` header plus one access-log event per request."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from book_catalog.core.logging import get_logger

logger = get_logger(__name__)

TIMING_HEADER = "X-Process-Time-Ms"


class TimingMiddleware(BaseHTTPMiddleware):
    """Time each request, expose the duration and log the outcome.

    Runs inside the request-id middleware, so the ``request_completed``
    event carries the bound ``request_id``.  5xx responses are logged at
    warning level.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers[TIMING_HEADER] = f"{elapsed_ms:.2f}"
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            elapsed_ms=elapsed_ms,
        )
        return response
