"""Request id propagation and timing that covers streamed bodies."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from command_center.observability.logger import get_logger

logger = get_logger("middleware")

REQUEST_ID_HEADER = "X-Request-ID"


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 2)


async def _timed_body(
    body: AsyncIterator,
    *,
    request_id: str,
    method: str,
    path: str,
    status: int,
    start: float,
    headers_ms: float,
) -> AsyncIterator:
    chunks = 0
    completed = False
    try:
        async for chunk in body:
            chunks += 1
            yield chunk
        completed = True
    finally:
        logger.info(
            "request_completed",
            request_id=request_id,
            method=method,
            path=path,
            status=status,
            chunks=chunks,
            completed=completed,
            headers_ms=headers_ms,
            duration_ms=_elapsed_ms(start),
        )


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs it once the body has been sent.

    An incoming ``X-Request-ID`` is reused. ``X-Duration-MS`` holds the time
    to response headers; the log event carries the full duration, which for
    a streamed chat answer includes the whole stream.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        start = time.monotonic()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                duration_ms=_elapsed_ms(start),
            )
            raise

        headers_ms = _elapsed_ms(start)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Duration-MS"] = str(headers_ms)
        response.body_iterator = _timed_body(
            response.body_iterator,
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            start=start,
            headers_ms=headers_ms,
        )
        return response
