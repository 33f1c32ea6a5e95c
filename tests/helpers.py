"""Test helper functions for common data creation patterns."""

from typing import Any

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.security import create_access_token
from src.billing.models.public import Tenant, User
from tests.factories import DEFAULT_TEST_PASSWORD, TenantFactory, UserFactory


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header with a freshly signed access token for the user."""
    token = create_access_token(user.id, user.email, user.role, user.tenant_id)
    return {"Authorization": f"Bearer {token}"}


async def create_tenant_with_admin(
    session: AsyncSession, **tenant_kwargs: Any
) -> tuple[Tenant, User]:
    """Create a tenant and its ADMIN user.

    Returns:
        Tuple of (tenant, admin)
    """
    tenant = TenantFactory.build(**tenant_kwargs)
    session.add(tenant)
    await session.flush()

    admin = UserFactory.tenant_admin(tenant_id=tenant.id)
    session.add(admin)
    await session.commit()
    return tenant, admin


async def login(client: AsyncClient, email: str, password: str = DEFAULT_TEST_PASSWORD) -> dict:
    """Log in through the API and return the response body."""
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.json()
    return response.json()
