import re
from datetime import UTC, datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BeforeValidator, Field, field_validator

from src.billing.models.enums import ChargeStatus, MessageStatus
from src.billing.schemas.base import CamelModel
from src.billing.schemas.customer import CustomerSummary

# dd/MM/yyyy with optional HH:mm[:ss]
PT_BR_DATETIME = re.compile(r"^(\d{2})/(\d{2})/(\d{4})(?:\s+(\d{2}):(\d{2})(?::(\d{2}))?)?$")

_CHARGE_TO_MESSAGE_STATUS = {
    ChargeStatus.PENDING.value: MessageStatus.SCHEDULED,
    ChargeStatus.OVERDUE.value: MessageStatus.SCHEDULED,
    ChargeStatus.PAID.value: MessageStatus.SENT,
}


def parse_flexible_datetime(value: Any) -> datetime | None:
    """Parse ``dd/MM/yyyy[ HH:mm[:ss]]`` or ISO 8601 into a naive UTC datetime.

    Empty strings and the literal ``"null"`` mean no date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    text = str(value).strip()
    if not text or text == "null":
        return None

    match = PT_BR_DATETIME.match(text)
    if match:
        day, month, year, hour, minute, second = match.groups()
        try:
            return datetime(
                int(year), int(month), int(day), int(hour or 0), int(minute or 0), int(second or 0)
            )
        except ValueError as e:
            raise ValueError("Invalid date (expected dd/MM/yyyy HH:mm:ss)") from e

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError(
            "Invalid date (use ISO 8601, e.g. 2025-11-13T10:30:00Z, or dd/MM/yyyy HH:mm:ss)"
        ) from e
    return _to_naive_utc(parsed)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def normalize_message_status(value: Any) -> MessageStatus:
    """Map free-form status input onto a message status.

    Charge statuses are translated (PENDING and OVERDUE become SCHEDULED, PAID becomes
    SENT). Anything unrecognised defaults to SCHEDULED.
    """
    if isinstance(value, MessageStatus):
        return value
    text = str(value).strip().upper() if value is not None else ""
    try:
        return MessageStatus(text)
    except ValueError:
        return _CHARGE_TO_MESSAGE_STATUS.get(text, MessageStatus.SCHEDULED)


FlexibleDatetime = Annotated[datetime | None, BeforeValidator(parse_flexible_datetime)]


class MessageCreate(CamelModel):
    customer_id: UUID
    charge_id: UUID | None = None
    phone: str = Field(min_length=1, max_length=20)
    body: str = Field(min_length=1)
    status: Annotated[MessageStatus, BeforeValidator(normalize_message_status)] = (
        MessageStatus.SCHEDULED
    )
    scheduled_at: FlexibleDatetime = None

    @field_validator("charge_id", mode="before")
    @classmethod
    def empty_charge_id(cls, v: Any) -> Any:
        return None if v == "" else v


class MessageUpdate(CamelModel):
    status: MessageStatus | None = None
    sent_at: FlexibleDatetime = None
    error: str | None = Field(default=None, max_length=5000)
    attempts: int | None = Field(default=None, ge=0)


class MessageListQuery(CamelModel):
    status: MessageStatus | None = None
    customer_id: UUID | None = None
    charge_id: UUID | None = None
    search: str | None = None
    start_date: FlexibleDatetime = None
    end_date: FlexibleDatetime = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class MessageRead(CamelModel):
    id: UUID
    customer_id: UUID
    charge_id: UUID | None = None
    phone: str
    body: str
    status: MessageStatus
    scheduled_at: datetime | None = None
    sent_at: datetime | None = None
    attempts: int
    error: str | None = None
    created_at: datetime
    updated_at: datetime
    customer: CustomerSummary | None = None
