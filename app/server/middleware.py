"""
Request logging middleware.

Every request gets a correlation ID (taken from the ``X-Request-ID``
header when the client sends one) that is bound for the duration of the
request and echoed back on the response, error responses included.
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response

from app.server.errors import unhandled_exception_handler
from app.server.logging import clear_correlation_id, get_logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a correlation ID and log the outcome of the request."""

    correlation_id = set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or None)
    started = time.perf_counter()
    try:
        try:
            response = await call_next(request)
        except Exception as exc:
            # Built here rather than by Starlette's outer error middleware so
            # the 500 still carries the request ID.
            response = await unhandled_exception_handler(request, exc)

        response.headers[REQUEST_ID_HEADER] = correlation_id
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
    finally:
        clear_correlation_id()


def register_middleware(app: FastAPI) -> None:
    """Attach the request logging middleware to ``app``."""
    app.middleware("http")(log_requests)


__all__ = ["REQUEST_ID_HEADER", "log_requests", "register_middleware"]
