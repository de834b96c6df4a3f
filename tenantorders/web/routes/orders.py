"""Order API routes. Authorization lives in OrderService, not here."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pydantic import BaseModel

from tenantorders.models.domain import Actor, OrderRecord
from tenantorders.services.orders import OrderService
from tenantorders.web.auth.actor import get_actor
from tenantorders.web.dependencies import get_order_service

router = APIRouter(prefix="/api/orders", tags=["orders"])


# Status stays a plain string so out-of-set values reach the service's
# validation and come back in the service's error shape.
class CreateOrderRequest(BaseModel):
    customer_name: str
    status: str = "pending"


class ChangeStatusRequest(BaseModel):
    status: str


@router.get("", response_model=list[OrderRecord])
async def list_orders(
    actor: Actor = Depends(get_actor),
    service: OrderService = Depends(get_order_service),
) -> list[OrderRecord]:
    return await service.list_orders(actor.tenant_id)


@router.post("", status_code=201, response_model=OrderRecord)
async def create_order(
    body: CreateOrderRequest,
    actor: Actor = Depends(get_actor),
    service: OrderService = Depends(get_order_service),
) -> OrderRecord:
    return await service.create_order(actor, body.customer_name, body.status)


@router.patch("/{order_id}/status", response_model=OrderRecord)
async def change_order_status(
    order_id: str,
    body: ChangeStatusRequest,
    actor: Actor = Depends(get_actor),
    service: OrderService = Depends(get_order_service),
) -> OrderRecord:
    return await service.change_status(actor, order_id, body.status)


@router.delete("/{order_id}")
async def delete_order(
    order_id: str,
    actor: Actor = Depends(get_actor),
    service: OrderService = Depends(get_order_service),
) -> Response:
    await service.delete_order(actor, order_id)
    return Response(status_code=204)
