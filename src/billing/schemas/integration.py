from uuid import UUID

from src.billing.schemas.base import CamelModel


class IntegrationTokenRequest(CamelModel):
    """Target tenant. Super-admins have no tenant of their own, so it is usually required."""

    tenant_id: UUID | None = None


class IntegrationTokenResponse(CamelModel):
    token: str
    token_id: str
    message: str = (
        "Integration token generated. Store it somewhere safe: it will not be shown again."
    )
