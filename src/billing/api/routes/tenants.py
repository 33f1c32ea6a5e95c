"""Tenant management endpoints.

The management routes are served under both ``/admin/tenants`` and ``/tenants``
and require a platform administrator. The slug lookup is public so client apps
can resolve a tenant before logging in.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from src.billing.api.dependencies import OptionalAuth, SuperAdmin, TenantServiceDep
from src.billing.models import Tenant
from src.billing.schemas.pagination import PaginatedResponse
from src.billing.schemas.tenant import (
    TenantCreate,
    TenantCreated,
    TenantDetail,
    TenantPublic,
    TenantRead,
    TenantUpdate,
)
from src.billing.schemas.user import UserRead
from src.billing.services.tenant_service import AdminUserInput

router = APIRouter(tags=["tenants"])
public_router = APIRouter(prefix="/tenants", tags=["tenants"])

_ADMIN_FIELDS = {"admin_email", "admin_password", "admin_name"}

_TENANT_EXAMPLE = {
    "id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
    "name": "Acme",
    "slug": "acme",
    "active": True,
    "config": {},
    "hasIntegrationToken": False,
    "createdAt": "2025-01-15T10:30:00",
    "updatedAt": "2025-01-15T10:30:00",
}


def _admin_input(data: TenantCreate | TenantUpdate) -> AdminUserInput | None:
    if not data.has_admin:
        return None
    return AdminUserInput(
        email=data.admin_email,  # type: ignore[arg-type]
        password=data.admin_password,  # type: ignore[arg-type]
        name=data.admin_name,  # type: ignore[arg-type]
    )


def _tenant_read(tenant: Tenant) -> TenantRead:
    return TenantRead.model_validate(tenant)


@router.post(
    "",
    response_model=TenantCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Tenant created",
            "content": {"application/json": {"example": {**_TENANT_EXAMPLE, "admin": None}}},
        },
        403: {"description": "Caller is not a platform administrator"},
        409: {"description": "Slug or admin email already in use"},
    },
)
async def create_tenant(
    data: TenantCreate,
    auth: OptionalAuth,
    service: TenantServiceDep,
) -> TenantCreated:
    """Create a tenant, optionally with its first ADMIN user.

    Send adminEmail, adminPassword and adminName together to create the admin.
    """
    if auth is None or not auth.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Super-admin access required",
        )

    tenant, admin = await service.create_tenant(
        data.name, data.slug, data.config, admin=_admin_input(data)
    )
    return TenantCreated.model_validate(tenant).model_copy(
        update={"admin": UserRead.model_validate(admin) if admin else None}
    )


@router.get("", response_model=PaginatedResponse[TenantRead])
async def list_tenants(
    _: SuperAdmin,
    service: TenantServiceDep,
    active: Annotated[bool | None, Query(description="Filter by active flag")] = None,
    search: Annotated[str | None, Query(description="Match on name or slug")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 10,
) -> PaginatedResponse[TenantRead]:
    """List all tenants, newest first."""
    tenants, total = await service.list_tenants(page, limit, active, search)
    return PaginatedResponse[TenantRead].build(
        [_tenant_read(t) for t in tenants], page, limit, total
    )


@router.get(
    "/{tenant_id}",
    response_model=TenantDetail,
    responses={404: {"description": "Tenant not found"}},
)
async def get_tenant(tenant_id: UUID, _: SuperAdmin, service: TenantServiceDep) -> TenantDetail:
    """Get a tenant with its ADMIN user and customer/charge counts."""
    details = await service.get_details(tenant_id)
    return TenantDetail.model_validate(details.tenant).model_copy(
        update={
            "admin": UserRead.model_validate(details.admin) if details.admin else None,
            "customer_count": details.customer_count,
            "charge_count": details.charge_count,
        }
    )


@router.put(
    "/{tenant_id}",
    response_model=TenantRead,
    responses={
        404: {"description": "Tenant not found"},
        409: {"description": "Slug or admin email already in use"},
    },
)
async def update_tenant(
    tenant_id: UUID,
    data: TenantUpdate,
    _: SuperAdmin,
    service: TenantServiceDep,
) -> TenantRead:
    """Update a tenant. Admin fields create or update the tenant's ADMIN user."""
    changes = data.model_dump(exclude_unset=True, exclude=_ADMIN_FIELDS)
    tenant = await service.update_tenant(tenant_id, changes, admin=_admin_input(data))
    return _tenant_read(tenant)


@router.delete(
    "/{tenant_id}",
    response_model=TenantRead,
    responses={
        400: {"description": "Tenant already inactive"},
        404: {"description": "Tenant not found"},
    },
)
async def deactivate_tenant(
    tenant_id: UUID, _: SuperAdmin, service: TenantServiceDep
) -> TenantRead:
    """Deactivate a tenant. Its users can no longer log in or refresh."""
    return _tenant_read(await service.deactivate_tenant(tenant_id))


@router.patch(
    "/{tenant_id}/activate",
    response_model=TenantRead,
    responses={
        400: {"description": "Tenant already active"},
        404: {"description": "Tenant not found"},
    },
)
async def activate_tenant(tenant_id: UUID, _: SuperAdmin, service: TenantServiceDep) -> TenantRead:
    """Reactivate a tenant."""
    return _tenant_read(await service.activate_tenant(tenant_id))


@public_router.get(
    "/slug/{slug}",
    response_model=TenantPublic,
    responses={404: {"description": "No active tenant with this slug"}},
)
async def get_tenant_by_slug(slug: str, service: TenantServiceDep) -> TenantPublic:
    """Resolve an active tenant by slug (no authentication)."""
    return TenantPublic.model_validate(await service.get_public_by_slug(slug))
