"""Tenant model - isolated customer organization."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, CheckConstraint, Column
from sqlmodel import Field, SQLModel

from src.billing.models.base import utc_now


class Tenant(SQLModel, table=True):
    """Tenant registry.

    The integration token is stored as a public id plus a hash of the full token.
    Both columns are set together or cleared together.
    """

    __tablename__ = "tenants"
    __table_args__ = (
        CheckConstraint(
            "(integration_token_id IS NULL) = (integration_token_hash IS NULL)",
            name="ck_tenants_integration_token_pair",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255, index=True)
    slug: str = Field(max_length=100, unique=True, index=True)
    is_active: bool = Field(default=True)
    config: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON, nullable=True))
    integration_token_id: str | None = Field(default=None, max_length=64, unique=True)
    integration_token_hash: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def has_integration_token(self) -> bool:
        return self.integration_token_id is not None
