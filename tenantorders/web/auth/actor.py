"""Resolve the request's Actor from the server-side session."""

from __future__ import annotations

import structlog
from fastapi import Depends, HTTPException, Request

from tenantorders.exceptions import PermissionDeniedError
from tenantorders.models.domain import Actor
from tenantorders.types import Role
from tenantorders.web.auth.session import SESSION_COOKIE, SessionAuth

logger = structlog.get_logger(__name__)


def get_session_auth(request: Request) -> SessionAuth:
    return request.app.state.session_auth


async def get_actor(request: Request) -> Actor:
    """Build the Actor from a validated session cookie.

    Tenant and role come only from the signed session, never from the
    request body or query string.
    """
    auth = get_session_auth(request)
    token = request.cookies.get(SESSION_COOKIE, "")
    session = auth.validate_session(token)
    if session is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        role = Role(session["role"])
    except ValueError as exc:
        logger.warning("session_role_invalid", role=session["role"])
        raise HTTPException(status_code=401, detail="Invalid session") from exc

    structlog.contextvars.bind_contextvars(tenant_id=session["tenant_id"], role=role.value)
    return Actor(tenant_id=session["tenant_id"], role=role, username=session["username"])


async def require_admin(actor: Actor = Depends(get_actor)) -> Actor:
    """Require the admin role."""
    if not actor.is_admin:
        raise PermissionDeniedError("only admins can seed demo data")
    return actor
