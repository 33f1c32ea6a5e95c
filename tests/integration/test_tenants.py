"""Tests for tenant administration endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.models import Tenant, User
from tests.factories import ChargeFactory, CustomerFactory, TenantFactory
from tests.helpers import auth_headers, login

pytestmark = pytest.mark.integration


class TestCreateTenant:
    async def test_create_tenant(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/api/admin/tenants",
            json={"name": "Acme", "slug": "ACME-Corp", "config": {"pix": {"enabled": True}}},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "acme-corp"
        assert data["active"] is True
        assert data["config"] == {"pix": {"enabled": True}}
        assert data["hasIntegrationToken"] is False
        assert data["admin"] is None

    async def test_create_tenant_with_admin(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/api/tenants",
            json={
                "name": "Gym",
                "slug": "gym-42",
                "adminEmail": "owner@gym.example",
                "adminPassword": "secret1",
                "adminName": "Owner",
            },
        )

        assert response.status_code == 201
        admin = response.json()["admin"]
        assert admin["email"] == "owner@gym.example"
        assert admin["role"] == "ADMIN"
        assert admin["isAdmin"] is False

        # The new admin can log in right away
        data = await login(admin_client, "owner@gym.example", "secret1")
        assert data["tenant"]["slug"] == "gym-42"

    async def test_partial_admin_fields_rejected(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/api/admin/tenants",
            json={"name": "Gym", "slug": "gym", "adminEmail": "owner@gym.example"},
        )

        assert response.status_code == 400

    async def test_duplicate_slug(self, admin_client: AsyncClient, test_tenant: Tenant):
        response = await admin_client.post(
            "/api/admin/tenants", json={"name": "Other", "slug": test_tenant.slug}
        )

        assert response.status_code == 409

    async def test_invalid_slug(self, admin_client: AsyncClient):
        response = await admin_client.post(
            "/api/admin/tenants", json={"name": "Other", "slug": "bad slug!"}
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "slug"

    async def test_anonymous_forbidden(self, client: AsyncClient):
        response = await client.post("/api/tenants", json={"name": "X", "slug": "x"})

        assert response.status_code == 403

    async def test_tenant_user_forbidden(self, tenant_client: AsyncClient):
        response = await tenant_client.post("/api/tenants", json={"name": "X", "slug": "x"})

        assert response.status_code == 403


class TestListAndGet:
    async def test_list_tenants(self, admin_client: AsyncClient, db_session: AsyncSession):
        db_session.add_all([TenantFactory.build(), TenantFactory.build(), TenantFactory.inactive()])
        await db_session.commit()

        response = await admin_client.get("/api/admin/tenants", params={"limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["totalItems"] == 3
        assert data["totalPages"] == 2
        assert data["pageSize"] == 2
        assert len(data["items"]) == 2

    async def test_list_filters(self, admin_client: AsyncClient, db_session: AsyncSession):
        db_session.add_all(
            [
                TenantFactory.build(name="Alpha Gym", slug="alpha-gym"),
                TenantFactory.build(name="Beta School", slug="beta-school"),
                TenantFactory.inactive(name="Gamma Gym", slug="gamma-gym"),
            ]
        )
        await db_session.commit()

        active = await admin_client.get("/api/admin/tenants", params={"active": "false"})
        assert [t["slug"] for t in active.json()["items"]] == ["gamma-gym"]

        search = await admin_client.get("/api/admin/tenants", params={"search": "gym"})
        assert {t["slug"] for t in search.json()["items"]} == {"alpha-gym", "gamma-gym"}

    async def test_list_requires_super_admin(self, tenant_client: AsyncClient):
        response = await tenant_client.get("/api/admin/tenants")

        assert response.status_code == 403

    async def test_get_tenant_details(
        self,
        admin_client: AsyncClient,
        tenant_and_admin: tuple[Tenant, User],
        db_session: AsyncSession,
    ):
        tenant, admin = tenant_and_admin
        customer = CustomerFactory.build(tenant_id=tenant.id)
        db_session.add(customer)
        await db_session.flush()
        db_session.add_all(
            [ChargeFactory.build(tenant_id=tenant.id, customer_id=customer.id) for _ in range(2)]
        )
        await db_session.commit()

        response = await admin_client.get(f"/api/admin/tenants/{tenant.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["admin"]["id"] == str(admin.id)
        assert data["customerCount"] == 1
        assert data["chargeCount"] == 2

    async def test_get_unknown_tenant(self, admin_client: AsyncClient):
        response = await admin_client.get(f"/api/admin/tenants/{TenantFactory.build().id}")

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


class TestUpdate:
    async def test_update_name_and_slug(self, admin_client: AsyncClient, test_tenant: Tenant):
        response = await admin_client.put(
            f"/api/admin/tenants/{test_tenant.id}",
            json={"name": "Renamed", "slug": "Renamed-Slug"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["slug"] == "renamed-slug"

    async def test_update_slug_conflict(
        self, admin_client: AsyncClient, test_tenant: Tenant, db_session: AsyncSession
    ):
        other = TenantFactory.build()
        db_session.add(other)
        await db_session.commit()

        response = await admin_client.put(
            f"/api/admin/tenants/{test_tenant.id}", json={"slug": other.slug}
        )

        assert response.status_code == 409

    async def test_update_replaces_admin_credentials(
        self,
        admin_client: AsyncClient,
        tenant_and_admin: tuple[Tenant, User],
        db_session: AsyncSession,
    ):
        tenant, admin = tenant_and_admin

        response = await admin_client.put(
            f"/api/admin/tenants/{tenant.id}",
            json={
                "adminEmail": "new-owner@example.com",
                "adminPassword": "changed1",
                "adminName": "New Owner",
            },
        )

        assert response.status_code == 200
        await db_session.refresh(admin)
        assert admin.email == "new-owner@example.com"
        data = await login(admin_client, "new-owner@example.com", "changed1")
        assert data["user"]["id"] == str(admin.id)

    async def test_update_creates_admin_when_missing(
        self, admin_client: AsyncClient, db_session: AsyncSession
    ):
        tenant = TenantFactory.build()
        db_session.add(tenant)
        await db_session.commit()

        response = await admin_client.put(
            f"/api/admin/tenants/{tenant.id}",
            json={"adminEmail": "first@example.com", "adminPassword": "secret1", "adminName": "F"},
        )

        assert response.status_code == 200
        result = await db_session.execute(select(User).where(User.tenant_id == tenant.id))
        created = result.scalar_one()
        assert created.role == "ADMIN"
        assert created.email == "first@example.com"


class TestActivation:
    async def test_deactivate_and_activate(self, admin_client: AsyncClient, test_tenant: Tenant):
        deactivated = await admin_client.delete(f"/api/admin/tenants/{test_tenant.id}")
        assert deactivated.status_code == 200
        assert deactivated.json()["active"] is False

        again = await admin_client.delete(f"/api/admin/tenants/{test_tenant.id}")
        assert again.status_code == 400

        activated = await admin_client.patch(f"/api/admin/tenants/{test_tenant.id}/activate")
        assert activated.status_code == 200
        assert activated.json()["active"] is True

        again = await admin_client.patch(f"/api/admin/tenants/{test_tenant.id}/activate")
        assert again.status_code == 400


class TestPublicSlugLookup:
    async def test_lookup_by_slug(self, client: AsyncClient, test_tenant: Tenant):
        response = await client.get(f"/api/tenants/slug/{test_tenant.slug.upper()}")

        assert response.status_code == 200
        assert response.json() == {
            "id": str(test_tenant.id),
            "name": test_tenant.name,
            "slug": test_tenant.slug,
        }

    async def test_inactive_tenant_hidden(self, client: AsyncClient, db_session: AsyncSession):
        tenant = TenantFactory.inactive()
        db_session.add(tenant)
        await db_session.commit()

        response = await client.get(f"/api/tenants/slug/{tenant.slug}")

        assert response.status_code == 404


async def test_super_admin_has_no_tenant_scope(client: AsyncClient, test_superuser: User):
    response = await client.get("/api/customers", headers=auth_headers(test_superuser))

    assert response.status_code == 403
    assert response.json()["error"] == "Tenant not identified"
