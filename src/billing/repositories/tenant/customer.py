"""Repository for Customer entity."""

from collections.abc import Collection
from typing import Literal
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select

from src.billing.models import Customer
from src.billing.repositories.base import BaseRepository

CustomerSortField = Literal["name", "phone", "amount", "dueDay", "active", "createdAt"]

_SORT_COLUMNS = {
    "name": Customer.name,
    "phone": Customer.phone,
    "amount": Customer.amount,
    "dueDay": Customer.due_day,
    "active": Customer.is_active,
    "createdAt": Customer.created_at,
}


class CustomerRepository(BaseRepository[Customer]):
    """Repository for Customer entity. Every query is filtered by tenant."""

    model = Customer

    async def get_in_tenant(self, tenant_id: UUID, customer_id: UUID) -> Customer | None:
        """Get a customer by id within a tenant."""
        result = await self.session.execute(
            select(Customer).where(Customer.id == customer_id, Customer.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_active_in_tenant(self, tenant_id: UUID, customer_id: UUID) -> Customer | None:
        """Get an active customer by id within a tenant."""
        result = await self.session.execute(
            select(Customer).where(
                Customer.id == customer_id,
                Customer.tenant_id == tenant_id,
                Customer.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def active_phone_taken(
        self, tenant_id: UUID, phone: str, exclude_id: UUID | None = None
    ) -> bool:
        """Check whether another active customer of the tenant uses this phone."""
        query = select(Customer.id).where(
            Customer.tenant_id == tenant_id,
            Customer.phone == phone,
            Customer.is_active == True,  # noqa: E712
        )
        if exclude_id is not None:
            query = query.where(Customer.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def list_paginated(
        self,
        tenant_id: UUID,
        page: int,
        limit: int,
        active: bool | None = None,
        search: str | None = None,
        sort_by: CustomerSortField | None = None,
        sort_order: Literal["asc", "desc"] = "asc",
    ) -> tuple[list[Customer], int]:
        """List the tenant's customers with filters and sorting.

        Returns:
            Tuple of (items, total)
        """
        query = select(Customer).where(Customer.tenant_id == tenant_id)
        if active is not None:
            query = query.where(Customer.is_active == active)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(Customer.name).like(pattern),
                    func.lower(Customer.phone).like(pattern),
                )
            )
        if sort_by is None:
            # Newest first unless a sort column is requested
            query = query.order_by(Customer.created_at.desc())  # type: ignore[attr-defined]
        else:
            column = _SORT_COLUMNS[sort_by]
            ordered = column.desc() if sort_order == "desc" else column.asc()  # type: ignore[attr-defined]
            query = query.order_by(ordered)
        return await self.paginate(query, page, limit)

    async def get_many_in_tenant(
        self, tenant_id: UUID, customer_ids: Collection[UUID]
    ) -> dict[UUID, Customer]:
        """Fetch several customers of a tenant, keyed by id."""
        if not customer_ids:
            return {}
        result = await self.session.execute(
            select(Customer).where(
                Customer.tenant_id == tenant_id,
                Customer.id.in_(customer_ids),  # type: ignore[attr-defined]
            )
        )
        return {customer.id: customer for customer in result.scalars().all()}
