"""Tests for charge endpoints."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.billing.models import Customer, Tenant, User
from tests.factories import ChargeFactory, CustomerFactory, MessageFactory, utc_now
from tests.helpers import auth_headers, create_tenant_with_admin

pytestmark = pytest.mark.integration


@pytest.fixture
async def customer(db_session: AsyncSession, test_tenant: Tenant) -> Customer:
    customer = CustomerFactory.build(tenant_id=test_tenant.id)
    db_session.add(customer)
    await db_session.commit()
    return customer


def charge_for(customer: Customer, **kwargs):
    return ChargeFactory.build(tenant_id=customer.tenant_id, customer_id=customer.id, **kwargs)


class TestCreateCharge:
    async def test_future_due_date_is_pending(self, tenant_client: AsyncClient, customer: Customer):
        due = date.today() + timedelta(days=5)

        response = await tenant_client.post(
            "/api/charges",
            json={"customerId": str(customer.id), "amount": 89.9, "dueDate": due.isoformat()},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["amount"] == 89.9
        assert data["customer"]["name"] == customer.name

    async def test_past_due_date_is_overdue(self, tenant_client: AsyncClient, customer: Customer):
        due = date.today() - timedelta(days=1)

        response = await tenant_client.post(
            "/api/charges",
            json={"customerId": str(customer.id), "amount": 50, "dueDate": due.isoformat()},
        )

        assert response.status_code == 201
        assert response.json()["status"] == "OVERDUE"

    async def test_inactive_customer(
        self, tenant_client: AsyncClient, test_tenant: Tenant, db_session: AsyncSession
    ):
        inactive = CustomerFactory.inactive(tenant_id=test_tenant.id)
        db_session.add(inactive)
        await db_session.commit()

        response = await tenant_client.post(
            "/api/charges",
            json={
                "customerId": str(inactive.id),
                "amount": 50,
                "dueDate": date.today().isoformat(),
            },
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Customer not found or inactive"

    async def test_non_positive_amount(self, tenant_client: AsyncClient, customer: Customer):
        response = await tenant_client.post(
            "/api/charges",
            json={
                "customerId": str(customer.id),
                "amount": -1,
                "dueDate": date.today().isoformat(),
            },
        )

        assert response.status_code == 400


class TestListCharges:
    async def test_filter_by_month_and_status(
        self, tenant_client: AsyncClient, customer: Customer, db_session: AsyncSession
    ):
        db_session.add_all(
            [
                charge_for(customer, due_date=date(2030, 3, 5)),
                charge_for(customer, due_date=date(2030, 3, 31), status="PAID", paid_at=utc_now()),
                charge_for(customer, due_date=date(2030, 4, 1)),
            ]
        )
        await db_session.commit()

        march = await tenant_client.get("/api/charges", params={"month": 3, "year": 2030})
        assert march.status_code == 200
        assert [c["dueDate"] for c in march.json()["items"]] == ["2030-03-05", "2030-03-31"]

        paid = await tenant_client.get(
            "/api/charges", params={"month": 3, "year": 2030, "status": "PAID"}
        )
        assert paid.json()["totalItems"] == 1
        assert paid.json()["items"][0]["customer"]["id"] == str(customer.id)

    async def test_filter_by_customer(
        self,
        tenant_client: AsyncClient,
        customer: Customer,
        test_tenant: Tenant,
        db_session: AsyncSession,
    ):
        other = CustomerFactory.build(tenant_id=test_tenant.id)
        db_session.add(other)
        db_session.add_all([charge_for(customer), charge_for(other)])
        await db_session.commit()

        response = await tenant_client.get(
            "/api/charges", params={"customerId": str(customer.id)}
        )

        assert response.json()["totalItems"] == 1

    async def test_invalid_month(self, tenant_client: AsyncClient):
        response = await tenant_client.get("/api/charges", params={"month": 13})

        assert response.status_code == 400

    async def test_due_today_and_overdue(
        self, tenant_client: AsyncClient, customer: Customer, db_session: AsyncSession
    ):
        today = date.today()
        db_session.add_all(
            [
                charge_for(customer, due_date=today),
                charge_for(customer, due_date=today, status="PAID", paid_at=utc_now()),
                ChargeFactory.overdue(3, tenant_id=customer.tenant_id, customer_id=customer.id),
                charge_for(customer, due_date=today + timedelta(days=3)),
            ]
        )
        await db_session.commit()

        due_today = await tenant_client.get("/api/charges/due-today")
        overdue = await tenant_client.get("/api/charges/overdue")

        assert [c["dueDate"] for c in due_today.json()] == [today.isoformat()]
        assert [c["status"] for c in overdue.json()] == ["OVERDUE"]


class TestUpdateCharge:
    async def test_moving_due_date_to_past_marks_overdue(
        self, tenant_client: AsyncClient, customer: Customer, db_session: AsyncSession
    ):
        charge = charge_for(customer)
        db_session.add(charge)
        await db_session.commit()

        response = await tenant_client.put(
            f"/api/charges/{charge.id}",
            json={"dueDate": (date.today() - timedelta(days=2)).isoformat()},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "OVERDUE"

    async def test_moving_due_date_to_future_marks_pending(
        self, tenant_client: AsyncClient, customer: Customer, db_session: AsyncSession
    ):
        charge = ChargeFactory.overdue(tenant_id=customer.tenant_id, customer_id=customer.id)
        db_session.add(charge)
        await db_session.commit()

        response = await tenant_client.put(
            f"/api/charges/{charge.id}",
            json={"dueDate": (date.today() + timedelta(days=7)).isoformat(), "amount": 120},
        )

        data = response.json()
        assert data["status"] == "PENDING"
        assert data["amount"] == 120

    async def test_paid_charge_keeps_status_on_past_due_date(
        self, tenant_client: AsyncClient, customer: Customer, db_session: AsyncSession
    ):
        charge = ChargeFactory.paid(tenant_id=customer.tenant_id, customer_id=customer.id)
        db_session.add(charge)
        await db_session.commit()

        response = await tenant_client.put(
            f"/api/charges/{charge.id}",
            json={"dueDate": (date.today() - timedelta(days=2)).isoformat()},
        )

        assert response.json()["status"] == "PAID"

    async def test_explicit_status_without_due_date(
        self, tenant_client: AsyncClient, customer: Customer, db_session: AsyncSession
    ):
        charge = charge_for(customer)
        db_session.add(charge)
        await db_session.commit()

        response = await tenant_client.put(
            f"/api/charges/{charge.id}", json={"status": "PAID"}
        )

        assert response.json()["status"] == "PAID"

    async def test_charge_of_other_tenant(
        self,
        client: AsyncClient,
        customer: Customer,
        db_session: AsyncSession,
    ):
        charge = charge_for(customer)
        db_session.add(charge)
        await db_session.commit()
        _, intruder = await create_tenant_with_admin(db_session)

        response = await client.get(f"/api/charges/{charge.id}", headers=auth_headers(intruder))

        assert response.status_code == 404


class TestPayCharge:
    async def test_pay(
        self, tenant_client: AsyncClient, customer: Customer, db_session: AsyncSession
    ):
        charge = ChargeFactory.overdue(tenant_id=customer.tenant_id, customer_id=customer.id)
        db_session.add(charge)
        await db_session.commit()

        response = await tenant_client.patch(f"/api/charges/{charge.id}/pay")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "PAID"
        assert data["paidAt"] is not None

        again = await tenant_client.patch(f"/api/charges/{charge.id}/pay")
        assert again.status_code == 400
        assert again.json()["error"] == "Charge is already paid"

    async def test_pay_unknown_charge(self, tenant_client: AsyncClient):
        response = await tenant_client.patch(
            "/api/charges/00000000-0000-0000-0000-000000000000/pay"
        )

        assert response.status_code == 404


class TestSituationSummary:
    async def test_buckets_with_latest_messages(
        self,
        client: AsyncClient,
        customer: Customer,
        test_tenant: Tenant,
        test_superuser: User,
        db_session: AsyncSession,
    ):
        today = date.today()
        upcoming = charge_for(customer, due_date=today + timedelta(days=2))
        due_today = charge_for(customer, due_date=today)
        overdue = ChargeFactory.overdue(tenant_id=customer.tenant_id, customer_id=customer.id)
        later = charge_for(customer, due_date=today + timedelta(days=3))
        paid = ChargeFactory.paid(
            tenant_id=customer.tenant_id, customer_id=customer.id, due_date=today
        )
        db_session.add_all([upcoming, due_today, overdue, later, paid])
        await db_session.flush()
        now = utc_now()
        db_session.add_all(
            [
                MessageFactory.build(
                    tenant_id=test_tenant.id,
                    customer_id=customer.id,
                    charge_id=due_today.id,
                    created_at=now - timedelta(minutes=minutes),
                )
                for minutes in range(3)
            ]
        )
        await db_session.commit()

        token = await client.post(
            "/api/integrations/token",
            json={"tenantId": str(test_tenant.id)},
            headers=auth_headers(test_superuser),
        )
        response = await client.get(
            "/api/charges/situation-summary",
            headers={"X-API-Token": token.json()["token"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert [c["id"] for c in data["upcoming"]] == [str(upcoming.id)]
        assert [c["id"] for c in data["dueToday"]] == [str(due_today.id)]
        assert [c["id"] for c in data["overdue"]] == [str(overdue.id)]
        assert len(data["dueToday"][0]["messages"]) == 2
        assert data["dueToday"][0]["customer"]["phone"] == customer.phone
        assert data["upcoming"][0]["messages"] == []

    async def test_accepts_user_session(self, tenant_client: AsyncClient):
        response = await tenant_client.get("/api/charges/situation-summary")

        assert response.status_code == 200
        assert response.json() == {"upcoming": [], "dueToday": [], "overdue": []}

    async def test_invalid_integration_token(self, client: AsyncClient):
        response = await client.get(
            "/api/charges/situation-summary", headers={"X-API-Token": "api_bogus.token"}
        )

        assert response.status_code == 401
