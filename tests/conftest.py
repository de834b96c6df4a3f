"""Shared test fixtures."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from tenantorders.config.settings import get_settings
from tenantorders.models import database  # noqa: F401  registers tables
from tenantorders.models.domain import Actor
from tenantorders.services.orders import OrderService
from tenantorders.storage.repositories.orders import InMemoryOrderStore
from tenantorders.types import Role


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch):
    """Isolate every test from the host environment and the settings cache."""
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("USE_DATABASE", "false")
    monkeypatch.setenv("DEBUG", "true")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture()
def service(store: InMemoryOrderStore) -> OrderService:
    return OrderService(store)


@pytest.fixture()
def admin_a() -> Actor:
    return Actor(tenant_id="tenantA", role=Role.ADMIN, username="alice-admin")


@pytest.fixture()
def staff_a() -> Actor:
    return Actor(tenant_id="tenantA", role=Role.STAFF, username="sam-staff")


@pytest.fixture()
def admin_b() -> Actor:
    return Actor(tenant_id="tenantB", role=Role.ADMIN, username="bea-admin")


@pytest.fixture()
def staff_b() -> Actor:
    return Actor(tenant_id="tenantB", role=Role.STAFF, username="stu-staff")


@pytest.fixture()
def app():
    """Create a fresh app instance (with its own in-memory stores) for tests."""
    from tenantorders.web.app import create_app

    return create_app()


@pytest.fixture()
async def client(app):
    """Unauthenticated async client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture()
async def async_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()
