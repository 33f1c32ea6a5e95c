"""Customer service - tenant-scoped customer management."""

from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.billing.core.logging import get_logger
from src.billing.models import Charge, Customer
from src.billing.models.base import utc_now
from src.billing.repositories import ChargeRepository, CustomerRepository
from src.billing.repositories.tenant.customer import CustomerSortField

logger = get_logger(__name__)

PHONE_TAKEN = "An active customer with this phone already exists"


class CustomerService:
    """Customer management for a single tenant.

    Phone numbers are unique among the tenant's active customers; inactive
    customers may share a phone with an active one.
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        charge_repo: ChargeRepository,
        session: AsyncSession,
        tenant_id: UUID,
    ):
        self.customer_repo = customer_repo
        self.charge_repo = charge_repo
        self.session = session
        self.tenant_id = tenant_id

    async def _get_or_404(self, customer_id: UUID) -> Customer:
        customer = await self.customer_repo.get_in_tenant(self.tenant_id, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer

    async def create_customer(
        self,
        name: str,
        phone: str,
        amount: Decimal,
        due_day: int,
        notes: str | None = None,
    ) -> Customer:
        """Create a customer.

        Raises:
            ConflictError: If an active customer already uses the phone.
        """
        if await self.customer_repo.active_phone_taken(self.tenant_id, phone):
            raise ConflictError(PHONE_TAKEN)

        customer = Customer(
            tenant_id=self.tenant_id,
            name=name,
            phone=phone,
            amount=amount,
            due_day=due_day,
            notes=notes,
        )
        try:
            self.customer_repo.add(customer)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Customer created", customer_id=str(customer.id))
        return customer

    async def list_customers(
        self,
        page: int,
        limit: int,
        active: bool | None = None,
        search: str | None = None,
        sort_by: CustomerSortField | None = None,
        sort_order: Literal["asc", "desc"] = "asc",
    ) -> tuple[list[Customer], int]:
        """List the tenant's customers.

        Returns:
            Tuple of (items, total)
        """
        return await self.customer_repo.list_paginated(
            self.tenant_id, page, limit, active, search, sort_by, sort_order
        )

    async def get_customer(self, customer_id: UUID) -> tuple[Customer, list[Charge]]:
        """Get a customer with their five latest charges.

        Raises:
            NotFoundError: If the customer is not in this tenant.
        """
        customer = await self._get_or_404(customer_id)
        charges = await self.charge_repo.list_latest_for_customer(self.tenant_id, customer_id)
        return customer, charges

    async def update_customer(self, customer_id: UUID, changes: dict[str, Any]) -> Customer:
        """Apply a partial update.

        Raises:
            NotFoundError: If the customer is not in this tenant.
            ConflictError: If the new phone is used by another active customer.
        """
        customer = await self._get_or_404(customer_id)

        phone = changes.get("phone")
        if phone is not None and phone != customer.phone:
            if await self.customer_repo.active_phone_taken(self.tenant_id, phone, customer.id):
                raise ConflictError(PHONE_TAKEN)

        try:
            for field, value in changes.items():
                setattr(customer, field, value)
            customer.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return customer

    async def deactivate_customer(self, customer_id: UUID) -> Customer:
        """Soft-delete a customer.

        Raises:
            NotFoundError: If the customer is not in this tenant.
            ValidationError: If the customer is already inactive.
        """
        customer = await self._get_or_404(customer_id)
        if not customer.is_active:
            raise ValidationError("Customer is already inactive")
        return await self._set_active(customer, False)

    async def activate_customer(self, customer_id: UUID) -> Customer:
        """Reactivate a customer.

        Raises:
            NotFoundError: If the customer is not in this tenant.
            ValidationError: If the customer is already active.
            ConflictError: If another active customer took the phone meanwhile.
        """
        customer = await self._get_or_404(customer_id)
        if customer.is_active:
            raise ValidationError("Customer is already active")
        if await self.customer_repo.active_phone_taken(self.tenant_id, customer.phone, customer.id):
            raise ConflictError(PHONE_TAKEN)
        return await self._set_active(customer, True)

    async def _set_active(self, customer: Customer, active: bool) -> Customer:
        try:
            customer.is_active = active
            customer.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Customer active flag changed", customer_id=str(customer.id), active=active)
        return customer
