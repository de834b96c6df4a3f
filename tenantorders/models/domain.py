"""Core data contracts shared by the policy, the service and the stores."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from tenantorders.types import OrderStatus, Role


@dataclass(frozen=True, slots=True)
class Actor:
    """Tenant-and-role identity a request executes under.

    The core trusts this value verbatim and never verifies it. Callers must
    build it from a server-verified session, never from client input.
    """

    tenant_id: str
    role: Role
    username: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class OrderRecord(BaseModel):
    id: str
    tenant_id: str
    customer_name: str
    status: OrderStatus


class Tenant(BaseModel):
    id: str
    name: str
