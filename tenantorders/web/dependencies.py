"""FastAPI dependency injection: stores and services per application."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import Request

from tenantorders.services.orders import OrderService
from tenantorders.storage.repositories.orders import InMemoryOrderStore, OrderStore
from tenantorders.storage.repositories.tenants import InMemoryTenantRepository

if TYPE_CHECKING:
    from tenantorders.config.settings import Settings


def create_order_store(settings: Settings) -> OrderStore:
    """Create the appropriate order store based on settings."""
    if settings.use_database:
        from tenantorders.storage.database import get_engine
        from tenantorders.storage.repositories.db_orders import DatabaseOrderStore

        return DatabaseOrderStore(get_engine())
    return InMemoryOrderStore()


def create_tenant_repo(settings: Settings) -> Any:
    """Create the appropriate tenant repository based on settings."""
    if settings.use_database:
        from tenantorders.storage.database import get_engine
        from tenantorders.storage.repositories.tenants import TenantRepository

        return TenantRepository(get_engine())
    return InMemoryTenantRepository()


def create_order_service(settings: Settings, store: OrderStore) -> OrderService:
    return OrderService(store, max_attempts=settings.status_update_max_attempts)


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_tenant_repo(request: Request) -> Any:
    return request.app.state.tenant_repo
