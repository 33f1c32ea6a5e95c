"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.billing.core.config import Settings

from .logging_context import logging_context_middleware
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "setup_middlewares",
    "SecurityHeadersMiddleware",
    "logging_context_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure all application middlewares.

    Middleware added last runs first, so the correlation id middleware is
    registered last to wrap everything else.
    """
    # Logging context - binds request_id to structlog context, logs the request
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    # Security headers (Helmet-style)
    # Use stricter CSP in production when OpenAPI docs are disabled
    csp = None
    if not settings.enable_openapi and settings.csp_production:
        csp = settings.csp_production
    app.add_middleware(SecurityHeadersMiddleware, content_security_policy=csp)

    # CORS - handle cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "X-Request-ID",
            settings.integration_token_header,
        ],
    )

    # Correlation ID - generates/propagates X-Request-ID
    app.add_middleware(CorrelationIdMiddleware)
