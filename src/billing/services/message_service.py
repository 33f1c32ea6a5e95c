"""Message service - reminder log kept by the tenant's messaging integration."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.exceptions import NotFoundError, ValidationError
from src.billing.core.logging import get_logger
from src.billing.models import Customer, Message, MessageStatus
from src.billing.models.base import utc_now
from src.billing.repositories import ChargeRepository, CustomerRepository, MessageRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class MessageWithCustomer:
    message: Message
    customer: Customer | None


class MessageService:
    """Message log for a single tenant."""

    def __init__(
        self,
        message_repo: MessageRepository,
        customer_repo: CustomerRepository,
        charge_repo: ChargeRepository,
        session: AsyncSession,
        tenant_id: UUID,
    ):
        self.message_repo = message_repo
        self.customer_repo = customer_repo
        self.charge_repo = charge_repo
        self.session = session
        self.tenant_id = tenant_id

    async def _with_customer(self, message: Message) -> MessageWithCustomer:
        customer = await self.customer_repo.get_in_tenant(self.tenant_id, message.customer_id)
        return MessageWithCustomer(message=message, customer=customer)

    async def create_message(
        self,
        customer_id: UUID,
        phone: str,
        body: str,
        status: MessageStatus = MessageStatus.SCHEDULED,
        charge_id: UUID | None = None,
        scheduled_at: datetime | None = None,
    ) -> MessageWithCustomer:
        """Record a message for an active customer.

        Raises:
            NotFoundError: If the customer is missing, inactive or in another tenant.
            ValidationError: If the charge does not belong to the tenant and customer.
        """
        customer = await self.customer_repo.get_active_in_tenant(self.tenant_id, customer_id)
        if customer is None:
            raise NotFoundError("Customer not found or inactive")

        if charge_id is not None:
            charge = await self.charge_repo.get_for_customer(self.tenant_id, charge_id, customer_id)
            if charge is None:
                raise ValidationError("Charge not found or does not belong to the given customer")

        message = Message(
            tenant_id=self.tenant_id,
            customer_id=customer_id,
            charge_id=charge_id,
            phone=phone,
            body=body,
            status=status.value,
            scheduled_at=scheduled_at,
        )
        try:
            self.message_repo.add(message)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Message recorded", message_id=str(message.id), status=message.status)
        return MessageWithCustomer(message=message, customer=customer)

    async def list_messages(
        self,
        page: int,
        limit: int,
        status: MessageStatus | None = None,
        customer_id: UUID | None = None,
        charge_id: UUID | None = None,
        search: str | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
    ) -> tuple[list[MessageWithCustomer], int]:
        """List the tenant's messages, newest first.

        Returns:
            Tuple of (items, total)
        """
        messages, total = await self.message_repo.list_paginated(
            self.tenant_id,
            page,
            limit,
            status=status.value if status else None,
            customer_id=customer_id,
            charge_id=charge_id,
            search=search,
            created_from=created_from,
            created_to=created_to,
        )
        customers = await self.customer_repo.get_many_in_tenant(
            self.tenant_id, {m.customer_id for m in messages}
        )
        items = [
            MessageWithCustomer(message=message, customer=customers.get(message.customer_id))
            for message in messages
        ]
        return items, total

    async def get_message(self, message_id: UUID) -> MessageWithCustomer:
        """Get a message with its customer.

        Raises:
            NotFoundError: If the message is not in this tenant.
        """
        message = await self.message_repo.get_in_tenant(self.tenant_id, message_id)
        if message is None:
            raise NotFoundError("Message not found")
        return await self._with_customer(message)

    async def update_message(self, message_id: UUID, changes: dict[str, Any]) -> MessageWithCustomer:
        """Record delivery progress (status, sent_at, error, attempts).

        Raises:
            NotFoundError: If the message is not in this tenant.
        """
        message = await self.message_repo.get_in_tenant(self.tenant_id, message_id)
        if message is None:
            raise NotFoundError("Message not found")

        try:
            for field, value in changes.items():
                if isinstance(value, MessageStatus):
                    value = value.value
                setattr(message, field, value)
            message.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Message updated", message_id=str(message_id), fields=sorted(changes))
        return await self._with_customer(message)
