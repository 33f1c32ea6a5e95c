"""Repository for Charge entity."""

from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.billing.models import Charge, ChargeStatus, Customer
from src.billing.repositories.base import BaseRepository

OPEN_STATUSES = (ChargeStatus.PENDING.value, ChargeStatus.OVERDUE.value)


class ChargeRepository(BaseRepository[Charge]):
    """Repository for Charge entity. Every query is filtered by tenant."""

    model = Charge

    async def get_in_tenant(self, tenant_id: UUID, charge_id: UUID) -> Charge | None:
        """Get a charge by id within a tenant."""
        result = await self.session.execute(
            select(Charge).where(Charge.id == charge_id, Charge.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_for_customer(
        self, tenant_id: UUID, charge_id: UUID, customer_id: UUID
    ) -> Charge | None:
        """Get a charge only if it belongs to the tenant and the given customer."""
        result = await self.session.execute(
            select(Charge).where(
                Charge.id == charge_id,
                Charge.tenant_id == tenant_id,
                Charge.customer_id == customer_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_paginated(
        self,
        tenant_id: UUID,
        page: int,
        limit: int,
        status: str | None = None,
        customer_id: UUID | None = None,
        due_from: date | None = None,
        due_to: date | None = None,
    ) -> tuple[list[Charge], int]:
        """List the tenant's charges ordered by due date.

        Returns:
            Tuple of (items, total)
        """
        query = select(Charge).where(Charge.tenant_id == tenant_id)
        if status:
            query = query.where(Charge.status == status)
        if customer_id:
            query = query.where(Charge.customer_id == customer_id)
        if due_from:
            query = query.where(Charge.due_date >= due_from)
        if due_to:
            query = query.where(Charge.due_date <= due_to)
        query = query.order_by(Charge.due_date.asc(), Charge.created_at.asc())  # type: ignore[attr-defined]
        return await self.paginate(query, page, limit)

    async def list_latest_for_customer(
        self, tenant_id: UUID, customer_id: UUID, limit: int = 5
    ) -> list[Charge]:
        """Latest charges of a customer by due date."""
        result = await self.session.execute(
            select(Charge)
            .where(Charge.tenant_id == tenant_id, Charge.customer_id == customer_id)
            .order_by(Charge.due_date.desc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_open_due_between(
        self, tenant_id: UUID, start: date | None, end: date | None
    ) -> list[tuple[Charge, Customer]]:
        """Open (pending or overdue) charges due within [start, end], with their customer.

        A None bound is left open. Results are ordered by due date.
        """
        query = (
            select(Charge, Customer)
            .join(Customer, Customer.id == Charge.customer_id)  # type: ignore[arg-type]
            .where(Charge.tenant_id == tenant_id, Charge.status.in_(OPEN_STATUSES))  # type: ignore[attr-defined]
        )
        if start is not None:
            query = query.where(Charge.due_date >= start)
        if end is not None:
            query = query.where(Charge.due_date <= end)
        query = query.order_by(Charge.due_date.asc())  # type: ignore[attr-defined]
        result = await self.session.execute(query)
        return [(charge, customer) for charge, customer in result.all()]

    async def list_open_due_before(
        self, tenant_id: UUID, before: date
    ) -> list[tuple[Charge, Customer]]:
        """Open charges whose due date is strictly before the given day."""
        result = await self.session.execute(
            select(Charge, Customer)
            .join(Customer, Customer.id == Charge.customer_id)  # type: ignore[arg-type]
            .where(
                Charge.tenant_id == tenant_id,
                Charge.status.in_(OPEN_STATUSES),  # type: ignore[attr-defined]
                Charge.due_date < before,
            )
            .order_by(Charge.due_date.asc())  # type: ignore[attr-defined]
        )
        return [(charge, customer) for charge, customer in result.all()]

    async def sum_and_count(
        self,
        tenant_id: UUID,
        statuses: Sequence[str] | None = None,
        due_from: date | None = None,
        due_to: date | None = None,
        paid_from: datetime | None = None,
        paid_to: datetime | None = None,
    ) -> tuple[Decimal, int]:
        """Aggregate amount and count of the tenant's charges matching the filters."""
        query = select(
            func.coalesce(func.sum(Charge.amount), 0),
            func.count(Charge.id),  # type: ignore[arg-type]
        ).where(Charge.tenant_id == tenant_id)
        if statuses:
            query = query.where(Charge.status.in_(statuses))  # type: ignore[attr-defined]
        if due_from is not None:
            query = query.where(Charge.due_date >= due_from)
        if due_to is not None:
            query = query.where(Charge.due_date <= due_to)
        if paid_from is not None:
            query = query.where(Charge.paid_at >= paid_from)  # type: ignore[operator]
        if paid_to is not None:
            query = query.where(Charge.paid_at < paid_to)  # type: ignore[operator]
        result = await self.session.execute(query)
        total, count = result.one()
        return Decimal(str(total)), int(count)
