"""User model - credentials for tenant users and super-admins."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import Field, SQLModel

from src.billing.models.base import utc_now
from src.billing.models.enums import UserRole


class User(SQLModel, table=True):
    """User account.

    Tenant users carry a tenant_id. Super-admins have no tenant and is_admin set.
    Email is unique per tenant; super-admin emails are unique among themselves.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),
        Index(
            "uq_users_superadmin_email",
            "email",
            unique=True,
            postgresql_where=text("tenant_id IS NULL"),
            sqlite_where=text("tenant_id IS NULL"),
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID | None = Field(default=None, foreign_key="tenants.id", index=True)
    email: str = Field(max_length=255, index=True)
    hashed_password: str = Field(max_length=255)
    name: str = Field(max_length=255)
    role: str = Field(default=UserRole.USER.value, max_length=20)
    is_admin: bool = Field(default=False)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_super_admin(self) -> bool:
        return self.is_admin and self.tenant_id is None
