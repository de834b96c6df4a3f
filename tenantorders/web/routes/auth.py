"""Mock login routes: pick a tenant and role, get a signed session cookie.

No credentials are verified. The session is the only place an Actor's
tenant and role come from.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from tenantorders.config.settings import get_settings
from tenantorders.models.domain import Actor
from tenantorders.types import Role
from tenantorders.web.auth.actor import get_actor, get_session_auth
from tenantorders.web.auth.session import SESSION_COOKIE
from tenantorders.web.dependencies import get_tenant_repo

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    tenant_id: str
    role: Role
    username: str


class ActorResponse(BaseModel):
    tenant_id: str
    tenant_name: str
    role: Role
    username: str


@router.post("/login", response_model=ActorResponse)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    tenant_repo: Any = Depends(get_tenant_repo),
) -> ActorResponse:
    settings = get_settings()
    username = body.username.strip()
    if not username:
        raise HTTPException(status_code=422, detail="Username is required")
    if body.tenant_id not in settings.tenants:
        raise HTTPException(status_code=422, detail=f"Unknown tenant {body.tenant_id!r}")

    tenant = await tenant_repo.ensure(body.tenant_id, settings.tenants[body.tenant_id])
    token = get_session_auth(request).create_session(username, body.tenant_id, body.role.value)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
        max_age=86400,
    )
    logger.info("user_logged_in", username=username, tenant_id=body.tenant_id)
    return ActorResponse(
        tenant_id=body.tenant_id,
        tenant_name=tenant.name,
        role=body.role,
        username=username,
    )


@router.post("/logout")
async def logout(request: Request, response: Response) -> dict[str, str]:
    """Destroy the current session."""
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        get_session_auth(request).destroy_session(token)
    response.delete_cookie(SESSION_COOKIE)
    return {"status": "logged_out"}


@router.get("/me", response_model=ActorResponse)
async def me(
    actor: Actor = Depends(get_actor),
    tenant_repo: Any = Depends(get_tenant_repo),
) -> ActorResponse:
    tenant = await tenant_repo.get(actor.tenant_id)
    return ActorResponse(
        tenant_id=actor.tenant_id,
        tenant_name=tenant.name if tenant else actor.tenant_id,
        role=actor.role,
        username=actor.username,
    )
