"""Tenant management service."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.billing.core.logging import get_logger
from src.billing.core.security import hash_password
from src.billing.models import Tenant, User, UserRole
from src.billing.models.base import utc_now
from src.billing.repositories import TenantRepository, UserRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class AdminUserInput:
    email: str
    password: str
    name: str


@dataclass(frozen=True)
class TenantDetails:
    tenant: Tenant
    admin: User | None
    customer_count: int
    charge_count: int


class TenantService:
    """Tenant management service - business logic only."""

    def __init__(
        self,
        tenant_repo: TenantRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.tenant_repo = tenant_repo
        self.user_repo = user_repo
        self.session = session

    async def _get_or_404(self, tenant_id: UUID) -> Tenant:
        tenant = await self.tenant_repo.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return tenant

    async def create_tenant(
        self,
        name: str,
        slug: str,
        config: dict[str, Any] | None = None,
        admin: AdminUserInput | None = None,
    ) -> tuple[Tenant, User | None]:
        """Create a tenant, optionally together with its ADMIN user.

        Tenant and admin are committed in one transaction, so a failing admin
        insert leaves no tenant behind.

        Raises:
            ConflictError: If the slug is taken or the admin email clashes.
        """
        slug = slug.lower()
        if await self.tenant_repo.exists_by_slug(slug):
            raise ConflictError("A tenant with this slug already exists")

        tenant = Tenant(name=name, slug=slug, config=config or {})
        admin_user: User | None = None
        try:
            self.tenant_repo.add(tenant)
            if admin is not None:
                admin_user = User(
                    tenant_id=tenant.id,
                    email=admin.email,
                    hashed_password=hash_password(admin.password),
                    name=admin.name,
                    role=UserRole.ADMIN.value,
                )
                self.user_repo.add(admin_user)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("A tenant with this slug or admin email already exists") from e

        logger.info(
            "Tenant created",
            tenant_id=str(tenant.id),
            slug=slug,
            with_admin=admin_user is not None,
        )
        return tenant, admin_user

    async def list_tenants(
        self,
        page: int,
        limit: int,
        active: bool | None = None,
        search: str | None = None,
    ) -> tuple[list[Tenant], int]:
        """List tenants with page/limit pagination.

        Returns:
            Tuple of (items, total)
        """
        return await self.tenant_repo.list_paginated(page, limit, active, search)

    async def get_details(self, tenant_id: UUID) -> TenantDetails:
        """Get a tenant with its ADMIN user and record counts.

        Raises:
            NotFoundError: If the tenant does not exist.
        """
        tenant = await self._get_or_404(tenant_id)
        return TenantDetails(
            tenant=tenant,
            admin=await self.user_repo.get_tenant_admin(tenant_id),
            customer_count=await self.tenant_repo.count_customers(tenant_id),
            charge_count=await self.tenant_repo.count_charges(tenant_id),
        )

    async def get_public_by_slug(self, slug: str) -> Tenant:
        """Get an active tenant by slug for unauthenticated bootstrap.

        Raises:
            NotFoundError: If no active tenant has this slug.
        """
        tenant = await self.tenant_repo.get_active_by_slug(slug.lower())
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return tenant

    async def update_tenant(
        self,
        tenant_id: UUID,
        changes: dict[str, Any],
        admin: AdminUserInput | None = None,
    ) -> Tenant:
        """Apply a partial update, then create or update the tenant's ADMIN user.

        Args:
            tenant_id: Tenant to update
            changes: Fields to set (name, slug, is_active, config)
            admin: Admin credentials to upsert, if given

        Raises:
            NotFoundError: If the tenant does not exist.
            ConflictError: If the new slug is taken, or another user of the tenant
                already has the admin email.
        """
        tenant = await self._get_or_404(tenant_id)

        slug = changes.get("slug")
        if slug is not None:
            changes["slug"] = slug = slug.lower()
            if slug != tenant.slug and await self.tenant_repo.exists_by_slug(slug, tenant.id):
                raise ConflictError("A tenant with this slug already exists")

        existing_admin: User | None = None
        if admin is not None:
            existing_admin = await self.user_repo.get_tenant_admin(tenant_id)
            same_email = await self.user_repo.get_by_tenant_and_email(tenant_id, admin.email)
            if same_email is not None and (
                existing_admin is None or same_email.id != existing_admin.id
            ):
                raise ConflictError("A user with this email already exists in this tenant")

        try:
            for field, value in changes.items():
                setattr(tenant, field, value)
            tenant.updated_at = utc_now()

            if admin is not None:
                if existing_admin is not None:
                    existing_admin.email = admin.email
                    existing_admin.hashed_password = hash_password(admin.password)
                    existing_admin.name = admin.name
                    existing_admin.updated_at = utc_now()
                else:
                    self.user_repo.add(
                        User(
                            tenant_id=tenant_id,
                            email=admin.email,
                            hashed_password=hash_password(admin.password),
                            name=admin.name,
                            role=UserRole.ADMIN.value,
                        )
                    )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("A record with these values already exists") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Tenant updated", tenant_id=str(tenant_id), fields=sorted(changes))
        return tenant

    async def _set_active(self, tenant_id: UUID, active: bool) -> Tenant:
        tenant = await self._get_or_404(tenant_id)
        if tenant.is_active == active:
            state = "active" if active else "inactive"
            raise ValidationError(f"Tenant is already {state}")
        try:
            tenant.is_active = active
            tenant.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Tenant active flag changed", tenant_id=str(tenant_id), active=active)
        return tenant

    async def deactivate_tenant(self, tenant_id: UUID) -> Tenant:
        """Deactivate a tenant.

        Raises:
            NotFoundError: If the tenant does not exist.
            ValidationError: If it is already inactive.
        """
        return await self._set_active(tenant_id, False)

    async def activate_tenant(self, tenant_id: UUID) -> Tenant:
        """Reactivate a tenant.

        Raises:
            NotFoundError: If the tenant does not exist.
            ValidationError: If it is already active.
        """
        return await self._set_active(tenant_id, True)
