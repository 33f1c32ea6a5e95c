"""Application error taxonomy and the handlers that render it.

Every failure leaves the API as ``{"success": false, "error": ..., "code": ...}``
together with the request id assigned by the correlation middleware.
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.billing.core.config import get_settings
from src.billing.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors raised by services and mapped to HTTP responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class InternalServerError(AppError):
    pass


_HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def error_body(message: str, code: str | None = None, **extra: Any) -> dict[str, Any]:
    """Build the uniform error payload."""
    body: dict[str, Any] = {"success": False, "error": message}
    if code:
        body["code"] = code
    body.update(extra)
    body["request_id"] = correlation_id.get()
    return body


def _format_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    details = []
    for err in exc.errors():
        # Drop the "body"/"query"/"path" location prefix
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append(
            {
                "field": ".".join(loc),
                "message": err.get("msg", ""),
                "code": err.get("type", ""),
            }
        )
    return details


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the uniform error payload."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Request failed",
            error=exc.message,
            code=exc.code,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.code),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = _format_validation_errors(exc)
        logger.warning("Request validation failed", path=request.url.path, details=details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Invalid request data", "VALIDATION_ERROR", details=details),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning("Unique constraint violated", path=request.url.path, error=str(exc.orig))
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=error_body("A record with these values already exists", "DUPLICATE_ENTRY"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), _HTTP_STATUS_CODES.get(exc.status_code)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        extra: dict[str, Any] = {}
        if get_settings().is_development:
            extra["details"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", "INTERNAL_SERVER_ERROR", **extra),
        )
