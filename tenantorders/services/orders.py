"""Order mutation service: fetch, decide, then mutate."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from tenantorders.exceptions import (
    ConflictError,
    CrossTenantAccessError,
    OrderNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from tenantorders.policy.authorization import (
    Action,
    AuthorizationPolicy,
    ChangeStatus,
    CreateOrder,
    Decision,
    DeleteOrder,
    Denied,
)
from tenantorders.types import DenialReason, OrderStatus

if TYPE_CHECKING:
    from tenantorders.models.domain import Actor, OrderRecord
    from tenantorders.storage.repositories.orders import OrderStore

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


def _parse_status(value: OrderStatus | str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError as exc:
        valid = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status {value!r}; expected one of: {valid}") from exc


def _raise_if_denied(decision: Decision) -> None:
    if not isinstance(decision, Denied):
        return
    if decision.reason == DenialReason.CROSS_TENANT_ACCESS:
        raise CrossTenantAccessError(decision.message)
    raise PermissionDeniedError(decision.message)


class OrderService:
    """The only component allowed to call the order store.

    Status changes use optimistic concurrency: the update is conditioned on
    the status read before the policy decision. When another writer got there
    first, the record is re-read and the decision re-evaluated, up to
    ``max_attempts`` times before ``ConflictError``. Deletes do not depend on
    the order's state, so concurrent deletes are last-writer-wins; the loser
    gets ``OrderNotFoundError``.
    """

    def __init__(
        self,
        store: OrderStore,
        policy: AuthorizationPolicy | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        self._store = store
        self._policy = policy or AuthorizationPolicy()
        self._max_attempts = max_attempts

    async def list_orders(self, tenant_id: str) -> list[OrderRecord]:
        """Return every order owned by ``tenant_id``. Same for all roles."""
        return await self._store.list_by_tenant(tenant_id)

    async def create_order(
        self,
        actor: Actor,
        customer_name: str,
        status: OrderStatus | str = OrderStatus.PENDING,
    ) -> OrderRecord:
        name = (customer_name or "").strip()
        if not name:
            raise ValidationError("Customer name is required")
        initial_status = _parse_status(status)

        self._decide(actor, None, CreateOrder())
        order = await self._store.create(actor.tenant_id, name, initial_status)
        logger.info(
            "order_created",
            id=order.id,
            tenant_id=order.tenant_id,
            status=order.status.value,
            actor=actor.username,
        )
        return order

    async def change_status(
        self,
        actor: Actor,
        order_id: str,
        new_status: OrderStatus | str,
    ) -> OrderRecord:
        existing = await self._fetch(order_id)
        target = _parse_status(new_status)
        action = ChangeStatus(target)

        for attempt in range(1, self._max_attempts + 1):
            self._decide(actor, existing, action)
            updated = await self._store.update_status(
                order_id, target, expected_status=existing.status
            )
            if updated is not None:
                logger.info(
                    "order_status_changed",
                    id=order_id,
                    tenant_id=existing.tenant_id,
                    from_status=existing.status.value,
                    to_status=target.value,
                    actor=actor.username,
                )
                return updated

            logger.debug(
                "order_status_conflict",
                id=order_id,
                attempt=attempt,
                max_attempts=self._max_attempts,
            )
            if attempt < self._max_attempts:
                existing = await self._fetch(order_id)

        raise ConflictError(
            f"Order {order_id} changed concurrently; gave up after {self._max_attempts} attempts"
        )

    async def delete_order(self, actor: Actor, order_id: str) -> None:
        existing = await self._fetch(order_id)
        self._decide(actor, existing, DeleteOrder())
        if not await self._store.delete(order_id):
            raise OrderNotFoundError(f"Order {order_id} not found")
        logger.info(
            "order_deleted",
            id=order_id,
            tenant_id=existing.tenant_id,
            actor=actor.username,
        )

    async def _fetch(self, order_id: str) -> OrderRecord:
        order = await self._store.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order {order_id} not found")
        return order

    def _decide(self, actor: Actor, existing: OrderRecord | None, action: Action) -> None:
        _raise_if_denied(self._policy.decide(actor, existing, action))
