"""Integration token endpoints (super-admin only)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body

from src.billing.api.context import AuthContext
from src.billing.api.dependencies import IntegrationTokenServiceDep, SuperAdmin
from src.billing.core.exceptions import ValidationError
from src.billing.schemas.auth import MessageResponse
from src.billing.schemas.integration import IntegrationTokenRequest, IntegrationTokenResponse

router = APIRouter(prefix="/integrations", tags=["integrations"])

OptionalTokenRequest = Annotated[IntegrationTokenRequest | None, Body()]


def _resolve_tenant(auth: AuthContext, data: IntegrationTokenRequest | None) -> UUID:
    tenant_id = (data.tenant_id if data else None) or auth.tenant_id
    if tenant_id is None:
        raise ValidationError("tenantId is required for platform administrators")
    return tenant_id


@router.post(
    "/token",
    response_model=IntegrationTokenResponse,
    responses={
        200: {
            "description": "Token generated; the plaintext is only returned here",
            "content": {
                "application/json": {
                    "example": {
                        "token": "api_3f1c9a2e8b7d4c6f9e0a1b2c3d4e5f60.q3J0c2VjcmV0LXZhbHVlLWV4YW1wbGU",
                        "tokenId": "api_3f1c9a2e8b7d4c6f9e0a1b2c3d4e5f60",
                        "message": "Integration token generated. Store it somewhere safe: "
                        "it will not be shown again.",
                    }
                }
            },
        },
        400: {"description": "No tenant given"},
        403: {"description": "Caller is not a platform administrator"},
        404: {"description": "Tenant not found or inactive"},
    },
)
async def generate_token(
    auth: SuperAdmin,
    service: IntegrationTokenServiceDep,
    data: OptionalTokenRequest = None,
) -> IntegrationTokenResponse:
    """Generate an integration token for a tenant, replacing any previous one."""
    token, token_id = await service.generate(_resolve_tenant(auth, data))
    return IntegrationTokenResponse(token=token, token_id=token_id)


@router.delete(
    "/token",
    response_model=MessageResponse,
    responses={
        400: {"description": "No tenant given, or tenant has no token"},
        403: {"description": "Caller is not a platform administrator"},
        404: {"description": "Tenant not found"},
    },
)
async def revoke_token(
    auth: SuperAdmin,
    service: IntegrationTokenServiceDep,
    data: OptionalTokenRequest = None,
) -> MessageResponse:
    """Revoke a tenant's integration token."""
    await service.revoke(_resolve_tenant(auth, data))
    return MessageResponse(message="Integration token revoked")
