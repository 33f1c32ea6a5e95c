"""Message model - payment reminders sent to customers."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Text
from sqlmodel import Field, SQLModel

from src.billing.models.base import utc_now
from src.billing.models.enums import MessageStatus


class Message(SQLModel, table=True):
    """Reminder message, optionally tied to a charge."""

    __tablename__ = "messages"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    customer_id: UUID = Field(foreign_key="customers.id", index=True)
    charge_id: UUID | None = Field(default=None, foreign_key="charges.id", index=True)
    phone: str = Field(max_length=20)
    body: str = Field(sa_type=Text)
    status: str = Field(default=MessageStatus.SCHEDULED.value, max_length=20, index=True)
    scheduled_at: datetime | None = Field(default=None)
    sent_at: datetime | None = Field(default=None)
    attempts: int = Field(default=0)
    error: str | None = Field(default=None, sa_type=Text)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
