import re
from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator

from src.billing.schemas.base import CamelModel, Money

PHONE_PATTERN = re.compile(r"^[\d\s()\-+]+$")


def validate_phone(v: str) -> str:
    v = v.strip()
    if not PHONE_PATTERN.match(v):
        raise ValueError("Phone may contain only digits, spaces, parentheses, '+' and '-'")
    return v


class CustomerCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=20)
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    due_day: int = Field(ge=1, le=31)
    notes: str | None = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return validate_phone(v)


class CustomerUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=1, max_length=20)
    amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    due_day: int | None = Field(default=None, ge=1, le=31)
    notes: str | None = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return validate_phone(v) if v is not None else None


class CustomerListQuery(CamelModel):
    active: bool | None = None
    search: str | None = None
    sort_by: Literal["name", "phone", "amount", "dueDay", "active", "createdAt"] | None = None
    sort_order: Literal["asc", "desc"] = "asc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class CustomerRead(CamelModel):
    id: UUID
    name: str
    phone: str
    amount: Money
    due_day: int
    notes: str | None = None
    is_active: bool = Field(serialization_alias="active")
    created_at: datetime
    updated_at: datetime


class CustomerSummary(CamelModel):
    id: UUID
    name: str
    phone: str
