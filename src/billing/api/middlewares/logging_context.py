"""Logging context middleware for request correlation and access logs."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.billing.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger("billing.access")

# Paths not worth an access log line
_QUIET_PATHS = frozenset({"/health", "/metrics"})


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id to log context and log each request with its duration.

    4xx responses are logged at warning level, 5xx at error level.
    """
    clear_request_context()
    bind_request_context(correlation_id.get(), request.method, request.url.path)
    start = time.perf_counter()
    try:
        response = await call_next(request)
        if request.url.path not in _QUIET_PATHS:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            if response.status_code >= 500:
                log = logger.error
            elif response.status_code >= 400:
                log = logger.warning
            else:
                log = logger.info
            log("Request completed", status_code=response.status_code, duration_ms=duration_ms)
        return response
    finally:
        clear_request_context()
