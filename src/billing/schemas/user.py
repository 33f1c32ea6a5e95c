from datetime import datetime
from uuid import UUID

from src.billing.schemas.base import CamelModel


class TenantSummary(CamelModel):
    id: UUID
    name: str
    slug: str


class UserRead(CamelModel):
    id: UUID
    email: str
    name: str
    role: str
    tenant_id: UUID | None = None
    is_admin: bool


class UserProfile(UserRead):
    """Current user as returned by /auth/me."""

    tenant: TenantSummary | None = None
    created_at: datetime
