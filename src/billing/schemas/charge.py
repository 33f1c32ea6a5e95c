from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from src.billing.models.enums import ChargeStatus
from src.billing.schemas.base import CamelModel, Money
from src.billing.schemas.customer import CustomerRead, CustomerSummary


class ChargeCreate(CamelModel):
    customer_id: UUID
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    due_date: date
    pix_qr_code: str | None = None
    pix_copy_paste: str | None = None
    notes: str | None = None


class ChargeUpdate(CamelModel):
    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    due_date: date | None = None
    status: ChargeStatus | None = None
    pix_qr_code: str | None = None
    pix_copy_paste: str | None = None
    notes: str | None = None


class ChargeListQuery(CamelModel):
    status: ChargeStatus | None = None
    customer_id: UUID | None = None
    month: int | None = Field(default=None, ge=1, le=12)
    year: int | None = Field(default=None, ge=2000, le=2100)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class ChargeRead(CamelModel):
    id: UUID
    customer_id: UUID
    amount: Money
    due_date: date
    status: ChargeStatus
    paid_at: datetime | None = None
    pix_qr_code: str | None = None
    pix_copy_paste: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    customer: CustomerSummary | None = None


class CustomerDetail(CustomerRead):
    """Customer with their latest charges."""

    charges: list[ChargeRead] = []


class MessageSummary(CamelModel):
    id: UUID
    status: str
    sent_at: datetime | None = None
    scheduled_at: datetime | None = None
    attempts: int
    error: str | None = None


class SituationItem(CamelModel):
    id: UUID
    amount: Money
    due_date: date
    status: ChargeStatus
    customer: CustomerSummary
    messages: list[MessageSummary] = []


class SituationSummary(CamelModel):
    """Open charges grouped by due date relative to today."""

    upcoming: list[SituationItem]
    due_today: list[SituationItem]
    overdue: list[SituationItem]
