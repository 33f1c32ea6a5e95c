"""Customer model - people billed by a tenant."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Index, Text
from sqlmodel import Field, SQLModel

from src.billing.models.base import utc_now


class Customer(SQLModel, table=True):
    """Customer of a tenant with a recurring monthly amount."""

    __tablename__ = "customers"
    __table_args__ = (Index("ix_customers_tenant_phone", "tenant_id", "phone"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    name: str = Field(max_length=255)
    phone: str = Field(max_length=20)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    due_day: int
    notes: str | None = Field(default=None, sa_type=Text)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
