"""Authentication context resolved for a request.

Built by the auth dependencies and passed explicitly to handlers; nothing
downstream reads the principal from ambient state.
"""

from dataclasses import dataclass
from uuid import UUID

from src.billing.models import Tenant, User


@dataclass(frozen=True)
class UserSummary:
    id: UUID
    email: str
    name: str
    role: str
    is_admin: bool


@dataclass(frozen=True)
class TenantSummary:
    id: UUID
    name: str
    slug: str


@dataclass(frozen=True)
class AuthContext:
    """Immutable principal for the current request.

    Attributes:
        user_id: Authenticated user, None for integration-token requests
        tenant_id: Tenant scope, None for super-admins
        user: Summary of the user, if any
        tenant: Summary of the tenant, if any
        via_integration_token: True when an integration token authorized the request
    """

    user_id: UUID | None
    tenant_id: UUID | None
    user: UserSummary | None = None
    tenant: TenantSummary | None = None
    via_integration_token: bool = False

    @property
    def is_super_admin(self) -> bool:
        return self.user is not None and self.user.is_admin and self.tenant_id is None

    @classmethod
    def for_user(cls, user: User, tenant: Tenant | None) -> "AuthContext":
        return cls(
            user_id=user.id,
            tenant_id=user.tenant_id,
            user=UserSummary(
                id=user.id,
                email=user.email,
                name=user.name,
                role=user.role,
                is_admin=user.is_admin,
            ),
            tenant=TenantSummary(id=tenant.id, name=tenant.name, slug=tenant.slug)
            if tenant is not None
            else None,
        )

    @classmethod
    def for_integration(cls, tenant_id: UUID, name: str, slug: str) -> "AuthContext":
        return cls(
            user_id=None,
            tenant_id=tenant_id,
            tenant=TenantSummary(id=tenant_id, name=name, slug=slug),
            via_integration_token=True,
        )
