"""Tenant scope dependencies.

Tenant-scoped services take their tenant id from the request's AuthContext only.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status

from src.billing.api.context import AuthContext
from src.billing.api.dependencies.auth import CurrentAuth, IntegrationOrAuth


def _require_tenant(auth: AuthContext) -> UUID:
    if auth.tenant_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Tenant not identified",
        )
    return auth.tenant_id


async def get_tenant_id(auth: CurrentAuth) -> UUID:
    """Tenant of the logged-in user. Super-admins have none and are rejected."""
    return _require_tenant(auth)


async def get_integration_tenant_id(auth: IntegrationOrAuth) -> UUID:
    """Tenant of the integration token, or of the logged-in user."""
    return _require_tenant(auth)


TenantId = Annotated[UUID, Depends(get_tenant_id)]
IntegrationTenantId = Annotated[UUID, Depends(get_integration_tenant_id)]
