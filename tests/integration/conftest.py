"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite database file, created from the model metadata
and installed as the application's engine singleton.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

import src.billing.models  # noqa: F401 - registers all tables on the metadata
from src.billing.core.db import engine as engine_module
from src.billing.core.health import reset_health_cache
from src.billing.main import create_app
from src.billing.models.public import Tenant, User
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory
from tests.helpers import auth_headers, create_tenant_with_admin


@pytest.fixture(autouse=True)
def _reset_health_cache() -> None:
    reset_health_cache()
    yield
    reset_health_cache()


@pytest.fixture
async def engine(tmp_path, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncEngine]:
    """Create a fresh database and make the app use it."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    monkeypatch.setattr(engine_module, "_engine", test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for arranging and inspecting data.

    The session does not auto-commit; call ``await session.commit()`` to persist.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """Create a test client without credentials."""
    app = create_app()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def tenant_and_admin(db_session: AsyncSession) -> tuple[Tenant, User]:
    """An active tenant with its ADMIN user."""
    return await create_tenant_with_admin(db_session)


@pytest.fixture
def test_tenant(tenant_and_admin: tuple[Tenant, User]) -> Tenant:
    return tenant_and_admin[0]


@pytest.fixture
def test_user(tenant_and_admin: tuple[Tenant, User]) -> dict:
    """The tenant ADMIN as a dict with its plaintext password."""
    _, admin = tenant_and_admin
    return {
        "id": str(admin.id),
        "email": admin.email,
        "password": DEFAULT_TEST_PASSWORD,
        "tenant_id": str(admin.tenant_id),
        "user": admin,
    }


@pytest.fixture
async def test_superuser(db_session: AsyncSession) -> User:
    """A platform administrator (no tenant)."""
    user = UserFactory.superuser()
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def tenant_client(
    client: AsyncClient, tenant_and_admin: tuple[Tenant, User]
) -> AsyncClient:
    """Client authenticated as the tenant ADMIN."""
    client.headers.update(auth_headers(tenant_and_admin[1]))
    return client


@pytest.fixture
async def admin_client(client: AsyncClient, test_superuser: User) -> AsyncClient:
    """Client authenticated as a platform administrator."""
    client.headers.update(auth_headers(test_superuser))
    return client
