"""Repository for Message entity."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select

from src.billing.models import Customer, Message
from src.billing.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for Message entity. Every query is filtered by tenant."""

    model = Message

    async def get_in_tenant(self, tenant_id: UUID, message_id: UUID) -> Message | None:
        """Get a message by id within a tenant."""
        result = await self.session.execute(
            select(Message).where(Message.id == message_id, Message.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def list_paginated(
        self,
        tenant_id: UUID,
        page: int,
        limit: int,
        status: str | None = None,
        customer_id: UUID | None = None,
        charge_id: UUID | None = None,
        search: str | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
    ) -> tuple[list[Message], int]:
        """List the tenant's messages, newest first.

        ``search`` matches the message body, the phone or the customer name.

        Returns:
            Tuple of (items, total)
        """
        query = select(Message).where(Message.tenant_id == tenant_id)
        if status:
            query = query.where(Message.status == status)
        if customer_id:
            query = query.where(Message.customer_id == customer_id)
        if charge_id:
            query = query.where(Message.charge_id == charge_id)
        if search:
            pattern = f"%{search.lower()}%"
            customer_ids = select(Customer.id).where(
                Customer.tenant_id == tenant_id,
                func.lower(Customer.name).like(pattern),
            )
            query = query.where(
                or_(
                    func.lower(Message.body).like(pattern),
                    Message.phone.like(pattern),  # type: ignore[attr-defined]
                    Message.customer_id.in_(customer_ids),  # type: ignore[attr-defined]
                )
            )
        if created_from:
            query = query.where(Message.created_at >= created_from)
        if created_to:
            query = query.where(Message.created_at <= created_to)
        query = query.order_by(Message.created_at.desc())  # type: ignore[attr-defined]
        return await self.paginate(query, page, limit)

    async def list_latest_for_charges(
        self, charge_ids: list[UUID], per_charge: int = 2
    ) -> dict[UUID, list[Message]]:
        """Latest messages for each charge, newest first."""
        if not charge_ids:
            return {}
        result = await self.session.execute(
            select(Message)
            .where(Message.charge_id.in_(charge_ids))  # type: ignore[union-attr]
            .order_by(Message.created_at.desc())  # type: ignore[attr-defined]
        )
        latest: dict[UUID, list[Message]] = {charge_id: [] for charge_id in charge_ids}
        for message in result.scalars().all():
            bucket = latest[message.charge_id]  # type: ignore[index]
            if len(bucket) < per_charge:
                bucket.append(message)
        return latest
