import re
from datetime import datetime
from typing import Any, Self
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from src.billing.schemas.auth import MAX_PASSWORD_LENGTH
from src.billing.schemas.base import CamelModel
from src.billing.schemas.user import UserRead

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
MAX_TENANT_SLUG_LENGTH = 100


def validate_tenant_slug(v: str) -> str:
    """Lowercase the slug and check it only holds letters, digits and hyphens."""
    v = v.strip().lower()
    if not SLUG_PATTERN.match(v):
        raise ValueError("Slug must contain only lowercase letters, numbers and hyphens")
    return v


class _TenantAdminFields(CamelModel):
    """Optional tenant ADMIN user. Email, password and name come together or not at all."""

    admin_email: EmailStr | None = None
    admin_password: str | None = Field(default=None, min_length=6, max_length=MAX_PASSWORD_LENGTH)
    admin_name: str | None = Field(default=None, min_length=1, max_length=255)

    @model_validator(mode="after")
    def validate_admin_fields(self) -> Self:
        if self.admin_email or self.admin_password:
            if not (self.admin_email and self.admin_password and self.admin_name):
                raise ValueError(
                    "adminEmail, adminPassword and adminName must be provided together"
                )
        return self

    @property
    def has_admin(self) -> bool:
        return bool(self.admin_email and self.admin_password and self.admin_name)


class TenantCreate(_TenantAdminFields):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(
        min_length=1,
        max_length=MAX_TENANT_SLUG_LENGTH,
        json_schema_extra={
            "examples": ["acme-corp", "gym-42"],
            "description": "Lowercase letters, numbers and hyphens.",
        },
    )
    config: dict[str, Any] | None = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        return validate_tenant_slug(v)


class TenantUpdate(_TenantAdminFields):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=MAX_TENANT_SLUG_LENGTH)
    is_active: bool | None = Field(default=None, alias="active")
    config: dict[str, Any] | None = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        return validate_tenant_slug(v) if v is not None else None


class TenantRead(CamelModel):
    id: UUID
    name: str
    slug: str
    is_active: bool = Field(serialization_alias="active")
    config: dict[str, Any] | None = None
    has_integration_token: bool = False
    created_at: datetime
    updated_at: datetime


class TenantCreated(TenantRead):
    admin: UserRead | None = None


class TenantDetail(TenantRead):
    admin: UserRead | None = None
    customer_count: int = 0
    charge_count: int = 0


class TenantPublic(CamelModel):
    """Minimal tenant data for the public slug lookup."""

    id: UUID
    name: str
    slug: str
