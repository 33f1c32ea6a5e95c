"""Charge service - tenant-scoped billing records."""

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.exceptions import NotFoundError, ValidationError
from src.billing.core.logging import get_logger
from src.billing.models import Charge, ChargeStatus, Customer, Message
from src.billing.models.base import utc_now
from src.billing.repositories import ChargeRepository, CustomerRepository, MessageRepository

logger = get_logger(__name__)

# Number of days after today that count as "upcoming"
UPCOMING_DAYS = 2
MESSAGES_PER_CHARGE = 2


def status_for_due_date(due_date: date, today: date | None = None) -> ChargeStatus:
    """Status of an unpaid charge: OVERDUE once the due date has passed."""
    today = today or date.today()
    return ChargeStatus.OVERDUE if due_date < today else ChargeStatus.PENDING


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a month."""
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


@dataclass(frozen=True)
class ChargeWithCustomer:
    charge: Charge
    customer: Customer | None


@dataclass(frozen=True)
class SituationEntry:
    charge: Charge
    customer: Customer
    messages: list[Message] = field(default_factory=list)


@dataclass(frozen=True)
class ChargeSituation:
    """Open charges bucketed by due date relative to today."""

    upcoming: list[SituationEntry]
    due_today: list[SituationEntry]
    overdue: list[SituationEntry]


def _pair(rows: list[tuple[Charge, Customer]]) -> list[ChargeWithCustomer]:
    return [ChargeWithCustomer(charge=charge, customer=customer) for charge, customer in rows]


class ChargeService:
    """Charge management for a single tenant."""

    def __init__(
        self,
        charge_repo: ChargeRepository,
        customer_repo: CustomerRepository,
        message_repo: MessageRepository,
        session: AsyncSession,
        tenant_id: UUID,
    ):
        self.charge_repo = charge_repo
        self.customer_repo = customer_repo
        self.message_repo = message_repo
        self.session = session
        self.tenant_id = tenant_id

    async def _get_or_404(self, charge_id: UUID) -> Charge:
        charge = await self.charge_repo.get_in_tenant(self.tenant_id, charge_id)
        if charge is None:
            raise NotFoundError("Charge not found")
        return charge

    async def _with_customer(self, charge: Charge) -> ChargeWithCustomer:
        customer = await self.customer_repo.get_in_tenant(self.tenant_id, charge.customer_id)
        return ChargeWithCustomer(charge=charge, customer=customer)

    async def create_charge(
        self,
        customer_id: UUID,
        amount: Decimal,
        due_date: date,
        pix_qr_code: str | None = None,
        pix_copy_paste: str | None = None,
        notes: str | None = None,
    ) -> ChargeWithCustomer:
        """Create a charge for an active customer. Status follows the due date.

        Raises:
            NotFoundError: If the customer is missing, inactive or in another tenant.
        """
        customer = await self.customer_repo.get_active_in_tenant(self.tenant_id, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found or inactive")

        charge = Charge(
            tenant_id=self.tenant_id,
            customer_id=customer_id,
            amount=amount,
            due_date=due_date,
            status=status_for_due_date(due_date).value,
            pix_qr_code=pix_qr_code,
            pix_copy_paste=pix_copy_paste,
            notes=notes,
        )
        try:
            self.charge_repo.add(charge)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Charge created", charge_id=str(charge.id), status=charge.status)
        return ChargeWithCustomer(charge=charge, customer=customer)

    async def list_charges(
        self,
        page: int,
        limit: int,
        status: ChargeStatus | None = None,
        customer_id: UUID | None = None,
        month: int | None = None,
        year: int | None = None,
    ) -> tuple[list[ChargeWithCustomer], int]:
        """List charges, optionally restricted to a month.

        When only one of month or year is given, the other defaults to today's.

        Returns:
            Tuple of (items, total)
        """
        due_from = due_to = None
        if month is not None or year is not None:
            today = date.today()
            due_from, due_to = month_bounds(year or today.year, month or today.month)

        charges, total = await self.charge_repo.list_paginated(
            self.tenant_id,
            page,
            limit,
            status=status.value if status else None,
            customer_id=customer_id,
            due_from=due_from,
            due_to=due_to,
        )
        customers = await self.customer_repo.get_many_in_tenant(
            self.tenant_id, {c.customer_id for c in charges}
        )
        items = [
            ChargeWithCustomer(charge=charge, customer=customers.get(charge.customer_id))
            for charge in charges
        ]
        return items, total

    async def get_charge(self, charge_id: UUID) -> ChargeWithCustomer:
        """Get a charge with its customer.

        Raises:
            NotFoundError: If the charge is not in this tenant.
        """
        return await self._with_customer(await self._get_or_404(charge_id))

    async def update_charge(self, charge_id: UUID, changes: dict[str, Any]) -> ChargeWithCustomer:
        """Apply a partial update.

        A new due date re-derives the status (PENDING or OVERDUE) unless the charge
        ends up PAID.

        Raises:
            NotFoundError: If the charge is not in this tenant.
        """
        charge = await self._get_or_404(charge_id)

        requested = changes.pop("status", None)
        status = ChargeStatus(requested) if requested is not None else ChargeStatus(charge.status)
        due_date = changes.get("due_date")
        if due_date is not None:
            if due_date < date.today() and charge.status != ChargeStatus.PAID.value:
                status = ChargeStatus.OVERDUE
            elif due_date >= date.today() and status != ChargeStatus.PAID:
                status = ChargeStatus.PENDING

        try:
            for name, value in changes.items():
                setattr(charge, name, value)
            charge.status = status.value
            charge.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return await self._with_customer(charge)

    async def mark_as_paid(self, charge_id: UUID) -> ChargeWithCustomer:
        """Mark a charge as PAID now.

        Raises:
            NotFoundError: If the charge is not in this tenant.
            ValidationError: If it is already paid.
        """
        charge = await self._get_or_404(charge_id)
        if charge.status == ChargeStatus.PAID.value:
            raise ValidationError("Charge is already paid")

        try:
            charge.status = ChargeStatus.PAID.value
            charge.paid_at = utc_now()
            charge.updated_at = charge.paid_at
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Charge paid", charge_id=str(charge.id))
        return await self._with_customer(charge)

    async def list_due_today(self) -> list[ChargeWithCustomer]:
        """Open charges due today."""
        today = date.today()
        rows = await self.charge_repo.list_open_due_between(self.tenant_id, today, today)
        return _pair(rows)

    async def list_overdue(self) -> list[ChargeWithCustomer]:
        """Open charges whose due date has passed."""
        rows = await self.charge_repo.list_open_due_before(self.tenant_id, date.today())
        return _pair(rows)

    async def situation_summary(self) -> ChargeSituation:
        """Group open charges into upcoming, due today and overdue.

        Upcoming covers the next two days, excluding today. Each entry carries the
        two most recent messages sent about the charge.
        """
        today = date.today()
        upcoming = await self.charge_repo.list_open_due_between(
            self.tenant_id, today + timedelta(days=1), today + timedelta(days=UPCOMING_DAYS)
        )
        due_today = await self.charge_repo.list_open_due_between(self.tenant_id, today, today)
        overdue = await self.charge_repo.list_open_due_before(self.tenant_id, today)

        charge_ids = [charge.id for charge, _ in upcoming + due_today + overdue]
        messages = await self.message_repo.list_latest_for_charges(
            charge_ids, per_charge=MESSAGES_PER_CHARGE
        )

        def entries(rows: list[tuple[Charge, Customer]]) -> list[SituationEntry]:
            return [
                SituationEntry(charge=charge, customer=customer, messages=messages[charge.id])
                for charge, customer in rows
            ]

        return ChargeSituation(
            upcoming=entries(upcoming),
            due_today=entries(due_today),
            overdue=entries(overdue),
        )
