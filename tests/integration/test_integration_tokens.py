"""Tests for integration token management and authentication."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.core.exceptions import NotFoundError, ValidationError
from src.billing.core.security import INTEGRATION_TOKEN_PREFIX
from src.billing.models import Tenant, User
from src.billing.repositories import TenantRepository
from src.billing.services import IntegrationTokenService
from tests.factories import TenantFactory
from tests.helpers import auth_headers

pytestmark = pytest.mark.integration


async def generate_token(client: AsyncClient, superuser: User, tenant: Tenant) -> dict:
    response = await client.post(
        "/api/integrations/token",
        json={"tenantId": str(tenant.id)},
        headers=auth_headers(superuser),
    )
    assert response.status_code == 200, response.json()
    return response.json()


class TestGenerate:
    async def test_generate_token(
        self,
        client: AsyncClient,
        test_superuser: User,
        test_tenant: Tenant,
        db_session: AsyncSession,
    ):
        data = await generate_token(client, test_superuser, test_tenant)

        assert data["tokenId"].startswith(INTEGRATION_TOKEN_PREFIX)
        assert data["token"].startswith(f"{data['tokenId']}.")
        assert "will not be shown again" in data["message"]

        await db_session.refresh(test_tenant)
        assert test_tenant.integration_token_id == data["tokenId"]
        assert test_tenant.integration_token_hash
        assert data["token"] not in test_tenant.integration_token_hash

    async def test_regenerate_replaces_previous_token(
        self, client: AsyncClient, test_superuser: User, test_tenant: Tenant
    ):
        first = await generate_token(client, test_superuser, test_tenant)
        second = await generate_token(client, test_superuser, test_tenant)

        assert first["tokenId"] != second["tokenId"]

        old = await client.get(
            "/api/charges/situation-summary", headers={"X-API-Token": first["token"]}
        )
        new = await client.get(
            "/api/charges/situation-summary", headers={"X-API-Token": second["token"]}
        )
        assert old.status_code == 401
        assert new.status_code == 200

    async def test_super_admin_must_name_tenant(
        self, client: AsyncClient, test_superuser: User
    ):
        response = await client.post("/api/integrations/token", headers=auth_headers(test_superuser))

        assert response.status_code == 400
        assert response.json()["error"] == "tenantId is required for platform administrators"

    async def test_tenant_admin_forbidden(
        self, client: AsyncClient, test_user: dict, test_tenant: Tenant
    ):
        response = await client.post(
            "/api/integrations/token",
            json={"tenantId": str(test_tenant.id)},
            headers=auth_headers(test_user["user"]),
        )

        assert response.status_code == 403

    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.post("/api/integrations/token", json={})

        assert response.status_code == 401

    async def test_unknown_tenant(self, client: AsyncClient, test_superuser: User):
        tenant = TenantFactory.build()

        response = await client.post(
            "/api/integrations/token",
            json={"tenantId": str(tenant.id)},
            headers=auth_headers(test_superuser),
        )

        assert response.status_code == 404

    async def test_inactive_tenant(
        self, client: AsyncClient, test_superuser: User, db_session: AsyncSession
    ):
        tenant = TenantFactory.inactive()
        db_session.add(tenant)
        await db_session.commit()

        response = await client.post(
            "/api/integrations/token",
            json={"tenantId": str(tenant.id)},
            headers=auth_headers(test_superuser),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Tenant not found or inactive"


class TestRevoke:
    async def test_revoke_token(
        self, client: AsyncClient, test_superuser: User, test_tenant: Tenant
    ):
        data = await generate_token(client, test_superuser, test_tenant)

        response = await client.request(
            "DELETE",
            "/api/integrations/token",
            json={"tenantId": str(test_tenant.id)},
            headers=auth_headers(test_superuser),
        )

        assert response.status_code == 200
        assert response.json()["success"] is True

        after = await client.get(
            "/api/charges/situation-summary", headers={"X-API-Token": data["token"]}
        )
        assert after.status_code == 401

    async def test_revoke_without_token(
        self, client: AsyncClient, test_superuser: User, test_tenant: Tenant
    ):
        response = await client.request(
            "DELETE",
            "/api/integrations/token",
            json={"tenantId": str(test_tenant.id)},
            headers=auth_headers(test_superuser),
        )

        assert response.status_code == 400


class TestIntegrationAuthentication:
    async def test_token_scopes_requests_to_its_tenant(
        self, client: AsyncClient, test_superuser: User, test_tenant: Tenant
    ):
        data = await generate_token(client, test_superuser, test_tenant)

        response = await client.get(
            "/api/charges/situation-summary", headers={"X-API-Token": data["token"]}
        )

        assert response.status_code == 200
        assert response.json() == {"upcoming": [], "dueToday": [], "overdue": []}

    @pytest.mark.parametrize(
        "token",
        [
            "garbage",
            "api_0123456789abcdef0123456789abcdef",
            "api_0123456789abcdef0123456789abcdef.c2VjcmV0",
        ],
    )
    async def test_invalid_tokens_rejected(self, client: AsyncClient, token: str):
        response = await client.get("/api/charges/situation-summary", headers={"X-API-Token": token})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid integration token"

    async def test_tampered_secret_rejected(
        self, client: AsyncClient, test_superuser: User, test_tenant: Tenant
    ):
        data = await generate_token(client, test_superuser, test_tenant)

        response = await client.get(
            "/api/charges/situation-summary",
            headers={"X-API-Token": f"{data['tokenId']}.tampered"},
        )

        assert response.status_code == 401

    async def test_token_of_deactivated_tenant_rejected(
        self,
        client: AsyncClient,
        test_superuser: User,
        test_tenant: Tenant,
        db_session: AsyncSession,
    ):
        data = await generate_token(client, test_superuser, test_tenant)
        await db_session.refresh(test_tenant)
        test_tenant.is_active = False
        await db_session.commit()

        response = await client.get(
            "/api/charges/situation-summary", headers={"X-API-Token": data["token"]}
        )

        assert response.status_code == 401

    async def test_integration_token_not_accepted_on_user_only_routes(
        self, client: AsyncClient, test_superuser: User, test_tenant: Tenant
    ):
        data = await generate_token(client, test_superuser, test_tenant)

        response = await client.get("/api/customers", headers={"X-API-Token": data["token"]})

        assert response.status_code == 401

    async def test_bearer_token_still_accepted(self, client: AsyncClient, test_user: dict):
        response = await client.get(
            "/api/charges/situation-summary", headers=auth_headers(test_user["user"])
        )

        assert response.status_code == 200


class TestIntegrationTokenService:
    @pytest.fixture
    def service(self, db_session: AsyncSession) -> IntegrationTokenService:
        return IntegrationTokenService(TenantRepository(db_session), db_session)

    async def test_validate_returns_tenant(
        self, service: IntegrationTokenService, test_tenant: Tenant
    ):
        token, _ = await service.generate(test_tenant.id)

        principal = await service.validate(token)

        assert principal.tenant_id == test_tenant.id
        assert principal.tenant_slug == test_tenant.slug

    @pytest.mark.parametrize(
        "token",
        ["not-a-token", "api_0123456789abcdef0123456789abcdef", "api_a.b.c"],
    )
    async def test_malformed_token(self, service: IntegrationTokenService, token: str):
        with pytest.raises(ValidationError):
            await service.validate(token)

    async def test_wrong_secret(self, service: IntegrationTokenService, test_tenant: Tenant):
        _, token_id = await service.generate(test_tenant.id)

        with pytest.raises(ValidationError):
            await service.validate(f"{token_id}.wrongsecret")

    async def test_previous_token_invalid_after_regenerate(
        self, service: IntegrationTokenService, test_tenant: Tenant
    ):
        old, _ = await service.generate(test_tenant.id)
        new, _ = await service.generate(test_tenant.id)

        with pytest.raises(ValidationError):
            await service.validate(old)
        assert (await service.validate(new)).tenant_id == test_tenant.id

    async def test_generate_for_inactive_tenant(
        self, service: IntegrationTokenService, db_session: AsyncSession
    ):
        tenant = TenantFactory.inactive()
        db_session.add(tenant)
        await db_session.commit()

        with pytest.raises(NotFoundError):
            await service.generate(tenant.id)

    async def test_generate_for_unknown_tenant(self, service: IntegrationTokenService):
        with pytest.raises(NotFoundError):
            await service.generate(TenantFactory.build().id)
