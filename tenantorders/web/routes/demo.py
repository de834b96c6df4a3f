"""Demo data route."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tenantorders.models.domain import Actor
from tenantorders.services.orders import OrderService
from tenantorders.storage.seed import seed_tenant_orders
from tenantorders.web.auth.actor import require_admin
from tenantorders.web.dependencies import get_order_service

router = APIRouter(prefix="/api/demo", tags=["demo"])


@router.post("/seed")
async def seed(
    actor: Actor = Depends(require_admin),
    service: OrderService = Depends(get_order_service),
) -> dict[str, int]:
    """Seed sample orders into the caller's own tenant."""
    created = await seed_tenant_orders(service, actor)
    return {"orders_created": created}
