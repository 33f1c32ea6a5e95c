"""Authentication and authorization dependencies."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from src.billing.api.context import AuthContext
from src.billing.api.dependencies.db import DBSession
from src.billing.api.dependencies.repositories import TenantRepo, UserRepo
from src.billing.core.config import get_settings
from src.billing.core.exceptions import ValidationError
from src.billing.core.logging import bind_user_context, get_logger
from src.billing.core.security import TokenDecodeError, decode_access_token
from src.billing.services.integration_token_service import IntegrationTokenService

logger = get_logger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _verify_session(
    authorization: str | None,
    user_repo: UserRepo,
    tenant_repo: TenantRepo,
) -> AuthContext:
    """Validate a bearer access token and resolve its user.

    Validates: header format, signature and expiry, claim shape, that the user is
    still active in the tenant named by the token, and that the tenant is active.
    The rejection reason is logged; clients always get a plain 401.
    """
    if not authorization or not authorization.startswith("Bearer "):
        logger.info("Access token rejected", reason="missing")
        raise _unauthorized("Missing or invalid authorization header")

    try:
        claims = decode_access_token(authorization[7:])
    except TokenDecodeError as e:
        logger.info("Access token rejected", reason=e.reason)
        raise _unauthorized("Invalid or expired token") from e

    user = await user_repo.get_active_in_scope(claims.user_id, claims.tenant_id)
    if user is None:
        logger.info("Access token rejected", reason="user_not_found", user_id=str(claims.sub))
        raise _unauthorized("User not found or inactive")

    tenant = None
    if user.tenant_id is not None:
        tenant = await tenant_repo.get_by_id(user.tenant_id)
        if tenant is None or not tenant.is_active:
            logger.info("Access token rejected", reason="tenant_inactive", user_id=str(user.id))
            raise _unauthorized("Tenant is inactive")

    bind_user_context(user.id, user.tenant_id, user.email)
    return AuthContext.for_user(user, tenant)


async def get_auth_context(
    user_repo: UserRepo,
    tenant_repo: TenantRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthContext:
    """Require a valid access token."""
    return await _verify_session(authorization, user_repo, tenant_repo)


CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]


async def get_optional_auth_context(
    user_repo: UserRepo,
    tenant_repo: TenantRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthContext | None:
    """Resolve the caller if an Authorization header is sent, else None.

    A header that is present but invalid is still rejected with 401.
    """
    if authorization is None:
        return None
    return await _verify_session(authorization, user_repo, tenant_repo)


OptionalAuth = Annotated[AuthContext | None, Depends(get_optional_auth_context)]


async def get_integration_or_auth_context(
    request: Request,
    session: DBSession,
    user_repo: UserRepo,
    tenant_repo: TenantRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> AuthContext:
    """Accept an integration token when its header is present, else a bearer token.

    Used only by the endpoints a tenant's messaging integration calls.
    """
    token = request.headers.get(get_settings().integration_token_header)
    if token is None:
        return await _verify_session(authorization, user_repo, tenant_repo)

    # Constructed directly (avoids circular import with the service factories)
    integration_service = IntegrationTokenService(tenant_repo, session)
    try:
        principal = await integration_service.validate(token)
    except ValidationError as e:
        raise _unauthorized(e.message) from e
    bind_user_context(None, principal.tenant_id, via_integration_token=True)
    return AuthContext.for_integration(
        principal.tenant_id, principal.tenant_name, principal.tenant_slug
    )


IntegrationOrAuth = Annotated[AuthContext, Depends(get_integration_or_auth_context)]


async def require_super_admin(auth: CurrentAuth) -> AuthContext:
    """Require a platform administrator (is_admin and no tenant)."""
    if not auth.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super-admin access required",
        )
    return auth


SuperAdmin = Annotated[AuthContext, Depends(require_super_admin)]
