"""Authentication endpoints."""

from fastapi import APIRouter, status

from src.billing.api.dependencies import AuthServiceDep, CurrentAuth
from src.billing.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
)
from src.billing.schemas.user import TenantSummary, UserProfile, UserRead
from src.billing.services.auth_service import AuthSession

router = APIRouter(prefix="/auth", tags=["auth"])

_AUTH_EXAMPLE = {
    "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
    "refreshToken": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08...",
    "tokenType": "bearer",
    "user": {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "email": "owner@acme.example",
        "name": "Acme Owner",
        "role": "ADMIN",
        "tenantId": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
        "isAdmin": False,
    },
    "tenant": {
        "id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
        "name": "Acme",
        "slug": "acme",
    },
}


def _auth_response(session: AuthSession) -> AuthResponse:
    return AuthResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user=UserRead.model_validate(session.user),
        tenant=TenantSummary.model_validate(session.tenant) if session.tenant else None,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {"application/json": {"example": _AUTH_EXAMPLE}},
        },
        401: {"description": "Invalid credentials or inactive tenant"},
    },
)
async def login(login_data: LoginRequest, service: AuthServiceDep) -> AuthResponse:
    """Authenticate with email and password and return a token pair.

    The same email may exist in several tenants; the oldest matching account is used.
    """
    authenticated = await service.login(login_data.email, login_data.password)
    return _auth_response(await service.create_session(authenticated))


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "User created and logged in",
            "content": {"application/json": {"example": _AUTH_EXAMPLE}},
        },
        404: {"description": "Tenant not found or inactive"},
        409: {"description": "Email already used in this tenant"},
    },
)
async def register(register_data: RegisterRequest, service: AuthServiceDep) -> AuthResponse:
    """Create a user in an existing tenant and return a token pair."""
    authenticated = await service.register(
        tenant_id=register_data.tenant_id,
        email=register_data.email,
        password=register_data.password,
        name=register_data.name,
        role=register_data.role,
    )
    return _auth_response(await service.create_session(authenticated))


@router.post(
    "/refresh",
    response_model=AuthResponse,
    responses={
        200: {
            "description": "Token refreshed with rotation",
            "content": {"application/json": {"example": _AUTH_EXAMPLE}},
        },
        401: {"description": "Invalid or expired refresh token"},
    },
)
async def refresh(refresh_data: RefreshRequest, service: AuthServiceDep) -> AuthResponse:
    """Exchange a refresh token for a new token pair.

    The submitted refresh token is revoked; only the returned one stays valid.
    """
    return _auth_response(await service.rotate(refresh_data.refresh_token))


@router.post("/logout", response_model=MessageResponse)
async def logout(logout_data: LogoutRequest, service: AuthServiceDep) -> MessageResponse:
    """Revoke a refresh token. Succeeds whether or not the token exists."""
    if logout_data.refresh_token:
        await service.revoke(logout_data.refresh_token)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserProfile,
    responses={401: {"description": "Not authenticated"}, 404: {"description": "User not found"}},
)
async def me(auth: CurrentAuth, service: AuthServiceDep) -> UserProfile:
    """Get the current user's profile."""
    # Bearer authentication always resolves a user
    profile = await service.get_profile(auth.user_id)  # type: ignore[arg-type]
    return UserProfile.model_validate(profile.user).model_copy(
        update={
            "tenant": TenantSummary.model_validate(profile.tenant) if profile.tenant else None
        }
    )
