"""Tenant registry — in-memory with DB-backed persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

from tenantorders.exceptions import StorageError
from tenantorders.models.database import TenantRow
from tenantorders.models.domain import Tenant

logger = structlog.get_logger(__name__)


class TenantRepository:
    """Stores tenants in PostgreSQL via the TenantRow model."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def ensure(self, tenant_id: str, name: str) -> Tenant:
        """Create the tenant unless it already exists; return the stored one."""
        try:
            async with AsyncSession(self._engine) as session:
                row = await session.get(TenantRow, tenant_id)
                if row is None:
                    row = TenantRow(id=tenant_id, name=name)
                    session.add(row)
                    await session.commit()
                    await session.refresh(row)
                    logger.info("tenant_created", tenant_id=tenant_id)
                return Tenant(id=row.id, name=row.name)
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to ensure tenant {tenant_id}: {exc}") from exc

    async def get(self, tenant_id: str) -> Tenant | None:
        try:
            async with AsyncSession(self._engine) as session:
                row = await session.get(TenantRow, tenant_id)
                return Tenant(id=row.id, name=row.name) if row else None
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to fetch tenant {tenant_id}: {exc}") from exc


class InMemoryTenantRepository:
    """In-memory tenant registry for local/dev use."""

    def __init__(self) -> None:
        self._tenants: dict[str, Tenant] = {}

    async def ensure(self, tenant_id: str, name: str) -> Tenant:
        if tenant_id not in self._tenants:
            self._tenants[tenant_id] = Tenant(id=tenant_id, name=name)
            logger.info("tenant_created", tenant_id=tenant_id)
        return self._tenants[tenant_id]

    async def get(self, tenant_id: str) -> Tenant | None:
        return self._tenants.get(tenant_id)
