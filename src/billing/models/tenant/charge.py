"""Charge model - a single amount owed by a customer."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Index, Text
from sqlmodel import Field, SQLModel

from src.billing.models.base import utc_now
from src.billing.models.enums import ChargeStatus


class Charge(SQLModel, table=True):
    """Charge with PIX payment data and a status derived from its due date."""

    __tablename__ = "charges"
    __table_args__ = (Index("ix_charges_tenant_status_due", "tenant_id", "status", "due_date"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    customer_id: UUID = Field(foreign_key="customers.id", index=True)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    due_date: date
    status: str = Field(default=ChargeStatus.PENDING.value, max_length=20)
    paid_at: datetime | None = Field(default=None)
    pix_qr_code: str | None = Field(default=None, sa_type=Text)
    pix_copy_paste: str | None = Field(default=None, sa_type=Text)
    notes: str | None = Field(default=None, sa_type=Text)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
