"""Repository for User entity."""

from uuid import UUID

from sqlmodel import select

from src.billing.models.public import User
from src.billing.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User

    async def list_active_by_email(self, email: str) -> list[User]:
        """List active users with this email across all tenants, oldest first."""
        result = await self.session.execute(
            select(User)
            .where(User.email == email, User.is_active == True)  # noqa: E712
            .order_by(User.created_at, User.id)
        )
        return list(result.scalars().all())

    async def get_active_in_scope(self, user_id: UUID, tenant_id: UUID | None) -> User | None:
        """Get an active user whose tenant matches the given scope.

        A None tenant_id matches only users without a tenant (super-admins);
        the filter is never dropped.
        """
        query = select(User).where(User.id == user_id, User.is_active == True)  # noqa: E712
        if tenant_id is None:
            query = query.where(User.tenant_id.is_(None))  # type: ignore[union-attr]
        else:
            query = query.where(User.tenant_id == tenant_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_tenant_and_email(self, tenant_id: UUID, email: str) -> User | None:
        """Get a user by email within a tenant."""
        result = await self.session.execute(
            select(User).where(User.tenant_id == tenant_id, User.email == email)
        )
        return result.scalar_one_or_none()

    async def exists_in_tenant(self, tenant_id: UUID, email: str) -> bool:
        """Check if a user with the given email exists in the tenant."""
        user = await self.get_by_tenant_and_email(tenant_id, email)
        return user is not None

    async def get_tenant_admin(self, tenant_id: UUID) -> User | None:
        """Get the oldest ADMIN user of a tenant."""
        result = await self.session.execute(
            select(User)
            .where(User.tenant_id == tenant_id, User.role == "ADMIN")
            .order_by(User.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_super_admin_by_email(self, email: str) -> User | None:
        """Get a platform administrator (no tenant) by email."""
        result = await self.session.execute(
            select(User).where(User.tenant_id.is_(None), User.email == email)  # type: ignore[union-attr]
        )
        return result.scalar_one_or_none()
