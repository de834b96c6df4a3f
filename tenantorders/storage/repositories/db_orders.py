"""Database-backed order store using SQLModel + AsyncSession."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

from tenantorders.exceptions import OrderNotFoundError, StorageError
from tenantorders.models.database import OrderRow, _utc_now
from tenantorders.models.domain import OrderRecord
from tenantorders.types import OrderStatus

logger = structlog.get_logger(__name__)


class DatabaseOrderStore:
    """PostgreSQL-backed order store using SQLModel.

    Exposes the same interface as the in-memory store so the service does
    not need to change. Engine failures are raised as ``StorageError``.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    def _to_record(self, row: OrderRow) -> OrderRecord:
        """Convert an OrderRow ORM instance to an OrderRecord."""
        return OrderRecord(
            id=row.id,
            tenant_id=row.tenant_id,
            customer_name=row.customer_name,
            status=OrderStatus(row.status),
        )

    async def create(
        self, tenant_id: str, customer_name: str, status: OrderStatus
    ) -> OrderRecord:
        try:
            async with AsyncSession(self._engine) as session:
                row = OrderRow(
                    tenant_id=tenant_id,
                    customer_name=customer_name,
                    status=status.value,
                )
                session.add(row)
                await session.commit()
                await session.refresh(row)
                record = self._to_record(row)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to create order: {exc}") from exc
        logger.debug("order_stored", id=record.id, tenant_id=tenant_id)
        return record

    async def get(self, order_id: str) -> OrderRecord | None:
        try:
            async with AsyncSession(self._engine) as session:
                row = await session.get(OrderRow, order_id)
                return self._to_record(row) if row else None
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to fetch order {order_id}: {exc}") from exc

    async def list_by_tenant(self, tenant_id: str) -> list[OrderRecord]:
        try:
            async with AsyncSession(self._engine) as session:
                statement = (
                    select(OrderRow)
                    .where(col(OrderRow.tenant_id) == tenant_id)
                    .order_by(col(OrderRow.created_at))
                )
                results = await session.execute(statement)
                return [self._to_record(r) for r in results.scalars().all()]
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to list orders: {exc}") from exc

    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        expected_status: OrderStatus | None = None,
    ) -> OrderRecord | None:
        statement = (
            update(OrderRow)
            .where(col(OrderRow.id) == order_id)
            .values(status=new_status.value, updated_at=_utc_now())
        )
        if expected_status is not None:
            statement = statement.where(col(OrderRow.status) == expected_status.value)

        try:
            async with AsyncSession(self._engine) as session:
                result = await session.execute(statement)
                await session.commit()
                if result.rowcount == 0:
                    # Distinguish a lost compare-and-swap from a missing row
                    row = await session.get(OrderRow, order_id)
                    if row is None:
                        raise OrderNotFoundError(f"Order {order_id} not found")
                    return None
                row = await session.get(OrderRow, order_id, populate_existing=True)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to update order {order_id}: {exc}") from exc

        if row is None:
            raise OrderNotFoundError(f"Order {order_id} not found")
        return self._to_record(row)

    async def delete(self, order_id: str) -> bool:
        try:
            async with AsyncSession(self._engine) as session:
                row = await session.get(OrderRow, order_id)
                if not row:
                    return False
                await session.delete(row)
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to delete order {order_id}: {exc}") from exc
        return True

    async def count(self) -> int:
        try:
            async with AsyncSession(self._engine) as session:
                result = await session.execute(select(func.count()).select_from(OrderRow))
                return int(result.scalar_one())
        except (SQLAlchemyError, OSError) as exc:
            raise StorageError(f"Failed to count orders: {exc}") from exc
