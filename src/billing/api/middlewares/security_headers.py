"""Security headers middleware (Helmet-style)."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

# Paths that should have Cache-Control: no-store (responses carry credentials)
_NO_CACHE_PATHS = frozenset(
    {
        "/api/auth/login",
        "/api/auth/refresh",
        "/api/auth/logout",
        "/api/auth/register",
        "/api/auth/me",
        "/api/integrations/token",
    }
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses (similar to Helmet.js)."""

    # CSP for development with Swagger UI: requires inline scripts and CDN assets
    DEFAULT_CSP = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
        "img-src 'self' data: cdn.jsdelivr.net; "
        "frame-ancestors 'none'"
    )

    def __init__(
        self,
        app: ASGIApp,
        content_security_policy: str | None = None,
        strict_transport_security: str | None = "max-age=31536000; includeSubDomains",
    ):
        super().__init__(app)
        csp = content_security_policy if content_security_policy is not None else self.DEFAULT_CSP
        self.headers: dict[str, str] = {
            "Content-Security-Policy": csp,
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "X-Permitted-Cross-Domain-Policies": "none",
        }
        if strict_transport_security:
            self.headers["Strict-Transport-Security"] = strict_transport_security

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)

        for header, value in self.headers.items():
            response.headers[header] = value

        if request.url.path in _NO_CACHE_PATHS:
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
            response.headers["Pragma"] = "no-cache"

        return response
