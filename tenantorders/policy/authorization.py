"""Tenant-isolated, role-based authorization for order mutations.

The policy is a pure decision function: it performs no I/O, holds no state
and never raises. Checks run in a fixed order because the resulting messages
are observable to callers:

1. ``CreateOrder`` is allowed for every role. The service scopes the new
   record to the actor's tenant, so there is nothing to isolate.
2. Every other action needs the existing record, and a tenant mismatch is
   denied as cross-tenant access before any role rule is consulted.
3. The ``(role, action)`` rule table decides. Pairs missing from the table
   are denied.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tenantorders.types import DenialReason, OrderStatus, Role

if TYPE_CHECKING:
    from tenantorders.models.domain import Actor, OrderRecord

STAFF_TRANSITION_MESSAGE = "staff can only change status from pending to in_progress"
ADMIN_ONLY_DELETE_MESSAGE = "only admins can delete orders"
CROSS_TENANT_MESSAGE = "cross-tenant access denied"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CreateOrder:
    pass


@dataclass(frozen=True, slots=True)
class ChangeStatus:
    new_status: OrderStatus


@dataclass(frozen=True, slots=True)
class DeleteOrder:
    pass


Action = CreateOrder | ChangeStatus | DeleteOrder


# ---------------------------------------------------------------------------
# Decisions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Allowed:
    allowed = True


@dataclass(frozen=True, slots=True)
class Denied:
    reason: DenialReason
    message: str
    allowed = False


Decision = Allowed | Denied

ALLOWED = Allowed()

Rule = Callable[["OrderRecord", Action], Decision]


def _allow(_existing: OrderRecord, _action: Action) -> Decision:
    return ALLOWED


def _staff_change_status(existing: OrderRecord, action: Action) -> Decision:
    if (
        isinstance(action, ChangeStatus)
        and existing.status == OrderStatus.PENDING
        and action.new_status == OrderStatus.IN_PROGRESS
    ):
        return ALLOWED
    return Denied(DenialReason.PERMISSION_DENIED, STAFF_TRANSITION_MESSAGE)


def _deny_delete(_existing: OrderRecord, _action: Action) -> Decision:
    return Denied(DenialReason.PERMISSION_DENIED, ADMIN_ONLY_DELETE_MESSAGE)


DEFAULT_RULES: dict[tuple[Role, type], Rule] = {
    (Role.ADMIN, ChangeStatus): _allow,
    (Role.ADMIN, DeleteOrder): _allow,
    (Role.STAFF, ChangeStatus): _staff_change_status,
    (Role.STAFF, DeleteOrder): _deny_delete,
}


class AuthorizationPolicy:
    """Decides whether an actor may perform an action on an order."""

    def __init__(self, rules: dict[tuple[Role, type], Rule] | None = None) -> None:
        self._rules = dict(DEFAULT_RULES if rules is None else rules)

    def decide(self, actor: Actor, existing: OrderRecord | None, action: Action) -> Decision:
        if isinstance(action, CreateOrder):
            return ALLOWED

        if existing is None:
            return Denied(DenialReason.PERMISSION_DENIED, f"{_action_name(action)} requires an order")

        if existing.tenant_id != actor.tenant_id:
            return Denied(DenialReason.CROSS_TENANT_ACCESS, CROSS_TENANT_MESSAGE)

        rule = self._rules.get((actor.role, type(action)))
        if rule is None:
            return Denied(
                DenialReason.PERMISSION_DENIED,
                f"role {actor.role} may not perform {_action_name(action)}",
            )
        return rule(existing, action)


def _action_name(action: Action) -> str:
    return type(action).__name__
