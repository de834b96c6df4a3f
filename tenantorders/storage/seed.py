"""Demo data seeding for the reference two-tenant deployment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from tenantorders.types import OrderStatus

if TYPE_CHECKING:
    from tenantorders.models.domain import Actor
    from tenantorders.services.orders import OrderService
    from tenantorders.storage.repositories.orders import OrderStore

logger = structlog.get_logger(__name__)

DEMO_ORDERS: dict[str, list[tuple[str, OrderStatus]]] = {
    "tenantA": [
        ("Alice Johnson", OrderStatus.PENDING),
        ("Bob Smith", OrderStatus.IN_PROGRESS),
        ("Charlie Brown", OrderStatus.COMPLETED),
    ],
    "tenantB": [
        ("Diana Ross", OrderStatus.PENDING),
        ("Eve Wilson", OrderStatus.IN_PROGRESS),
        ("Frank Miller", OrderStatus.COMPLETED),
    ],
}


async def seed_demo_data(
    tenants: dict[str, str],
    tenant_repo: Any,
    order_store: OrderStore,
    demo_orders: dict[str, list[tuple[str, OrderStatus]]] | None = None,
) -> int:
    """Ensure tenants exist and insert sample orders into an empty store.

    Startup fixture path only: it writes to the store directly, for every
    configured tenant, with no actor and no policy decision. Never expose it
    to a request. Sample orders are only written when the order store holds
    no orders at all. Returns the number of orders created.
    """
    for tenant_id, name in tenants.items():
        await tenant_repo.ensure(tenant_id, name)

    if await order_store.count() > 0:
        logger.info("seed_skipped", reason="orders_exist")
        return 0

    created = 0
    for tenant_id, orders in (demo_orders or DEMO_ORDERS).items():
        if tenant_id not in tenants:
            continue
        for customer_name, status in orders:
            await order_store.create(tenant_id, customer_name, status)
            created += 1

    logger.info("seed_completed", orders_created=created, tenants=len(tenants))
    return created


async def seed_tenant_orders(
    service: OrderService,
    actor: Actor,
    demo_orders: dict[str, list[tuple[str, OrderStatus]]] | None = None,
) -> int:
    """Create the actor's tenant's sample orders through the order service.

    Only the actor's own tenant is touched, and only while it has no orders.
    """
    if await service.list_orders(actor.tenant_id):
        logger.info("seed_skipped", reason="orders_exist", tenant_id=actor.tenant_id)
        return 0

    orders = (demo_orders or DEMO_ORDERS).get(actor.tenant_id, [])
    for customer_name, status in orders:
        await service.create_order(actor, customer_name, status)

    logger.info("seed_completed", orders_created=len(orders), tenant_id=actor.tenant_id)
    return len(orders)
