"""Repository for Tenant entity."""

from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import select

from src.billing.models import Charge, Customer, Tenant
from src.billing.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant entity."""

    model = Tenant

    async def get_by_slug(self, slug: str) -> Tenant | None:
        """Get tenant by slug."""
        result = await self.session.execute(select(Tenant).where(Tenant.slug == slug))
        return result.scalar_one_or_none()

    async def get_active_by_slug(self, slug: str) -> Tenant | None:
        """Get an active tenant by slug."""
        result = await self.session.execute(
            select(Tenant).where(Tenant.slug == slug, Tenant.is_active == True)  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def exists_by_slug(self, slug: str, exclude_id: UUID | None = None) -> bool:
        """Check if a tenant other than exclude_id already uses the slug."""
        tenant = await self.get_by_slug(slug)
        return tenant is not None and tenant.id != exclude_id

    async def get_active_by_integration_token_id(self, token_id: str) -> Tenant | None:
        """Get the active tenant holding the given integration token public id."""
        result = await self.session.execute(
            select(Tenant).where(
                Tenant.integration_token_id == token_id,
                Tenant.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def list_paginated(
        self,
        page: int,
        limit: int,
        active: bool | None = None,
        search: str | None = None,
    ) -> tuple[list[Tenant], int]:
        """List tenants, newest first.

        Args:
            page: 1-based page number
            limit: Page size
            active: Filter by active flag when given
            search: Case-insensitive match on name or slug

        Returns:
            Tuple of (items, total)
        """
        query = select(Tenant)
        if active is not None:
            query = query.where(Tenant.is_active == active)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.where(
                or_(
                    func.lower(Tenant.name).like(pattern),
                    func.lower(Tenant.slug).like(pattern),
                )
            )
        query = query.order_by(Tenant.created_at.desc())  # type: ignore[attr-defined]
        return await self.paginate(query, page, limit)

    async def count_customers(self, tenant_id: UUID) -> int:
        """Count the tenant's customers."""
        return await self.count(select(Customer.id).where(Customer.tenant_id == tenant_id))

    async def count_charges(self, tenant_id: UUID) -> int:
        """Count the tenant's charges."""
        return await self.count(select(Charge.id).where(Charge.tenant_id == tenant_id))
