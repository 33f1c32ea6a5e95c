"""Logging configuration using structlog."""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars


def setup_logging(debug: bool = False) -> None:
    """Configure structlog for structured logging.

    Args:
        debug: If True, use colored console output. If False, use JSON for production.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None,
    method: str | None = None,
    path: str | None = None,
) -> None:
    """Bind request-level context to all subsequent log calls.

    Args:
        request_id: The correlation ID for the current request.
        method: HTTP method, bound alongside the request id when given.
        path: Request path, bound alongside the request id when given.
    """
    if request_id:
        bind_contextvars(request_id=request_id)
    if method:
        bind_contextvars(method=method)
    if path:
        bind_contextvars(path=path)


def bind_user_context(
    user_id: UUID | None,
    tenant_id: UUID | None,
    email: str | None = None,
    via_integration_token: bool = False,
) -> None:
    """Bind the authenticated principal to all subsequent log calls.

    Super-admins have no tenant, so tenant_id is bound as None for them.
    Integration-token requests have no user.

    Args:
        user_id: The authenticated user's ID, if any.
        tenant_id: The tenant scope resolved for the request.
        email: Optional user email.
               Only logged if settings.log_user_emails is True (GDPR compliance).
        via_integration_token: Whether the request authenticated with an integration token.
    """
    from src.billing.core.config import get_settings

    bind_contextvars(
        user_id=str(user_id) if user_id else None,
        tenant_id=str(tenant_id) if tenant_id else None,
    )
    if via_integration_token:
        bind_contextvars(auth="integration_token")

    settings = get_settings()
    if email and settings.log_user_emails:
        bind_contextvars(user_email=email)


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()
