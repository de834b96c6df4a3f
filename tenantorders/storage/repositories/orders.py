"""Order store contract and its in-memory implementation."""

from __future__ import annotations

import uuid
from typing import Protocol

import structlog

from tenantorders.exceptions import OrderNotFoundError
from tenantorders.models.domain import OrderRecord
from tenantorders.types import OrderStatus

logger = structlog.get_logger(__name__)


class OrderStore(Protocol):
    """Key-addressed document store for orders.

    Performs no authorization of its own. Implementations raise
    ``StorageError`` when the underlying engine fails.
    """

    async def create(
        self, tenant_id: str, customer_name: str, status: OrderStatus
    ) -> OrderRecord: ...

    async def get(self, order_id: str) -> OrderRecord | None: ...

    async def list_by_tenant(self, tenant_id: str) -> list[OrderRecord]: ...

    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        expected_status: OrderStatus | None = None,
    ) -> OrderRecord | None:
        """Set the status of an order.

        When ``expected_status`` is given the write only happens if the stored
        status still equals it; otherwise ``None`` is returned. Raises
        ``OrderNotFoundError`` if the order does not exist.
        """
        ...

    async def delete(self, order_id: str) -> bool: ...

    async def count(self) -> int: ...


class InMemoryOrderStore:
    """In-memory order store. Replaced by SQLModel + PostgreSQL in production."""

    def __init__(self) -> None:
        self._orders: dict[str, OrderRecord] = {}

    async def create(
        self, tenant_id: str, customer_name: str, status: OrderStatus
    ) -> OrderRecord:
        order = OrderRecord(
            id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            customer_name=customer_name,
            status=status,
        )
        self._orders[order.id] = order
        logger.debug("order_stored", id=order.id, tenant_id=tenant_id)
        return order.model_copy()

    async def get(self, order_id: str) -> OrderRecord | None:
        order = self._orders.get(order_id)
        return order.model_copy() if order else None

    async def list_by_tenant(self, tenant_id: str) -> list[OrderRecord]:
        return [o.model_copy() for o in self._orders.values() if o.tenant_id == tenant_id]

    async def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        expected_status: OrderStatus | None = None,
    ) -> OrderRecord | None:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order {order_id} not found")
        if expected_status is not None and order.status != expected_status:
            return None
        updated = order.model_copy(update={"status": new_status})
        self._orders[order_id] = updated
        return updated.model_copy()

    async def delete(self, order_id: str) -> bool:
        return self._orders.pop(order_id, None) is not None

    async def count(self) -> int:
        return len(self._orders)
