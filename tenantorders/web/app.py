"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tenantorders.config.logging import setup_logging
from tenantorders.config.settings import get_settings
from tenantorders.exceptions import (
    ConflictError,
    CrossTenantAccessError,
    OrderNotFoundError,
    PermissionDeniedError,
    StorageError,
    TenantOrdersError,
    ValidationError,
)
from tenantorders.storage.seed import seed_demo_data
from tenantorders.web.auth.session import SessionAuth
from tenantorders.web.dependencies import (
    create_order_service,
    create_order_store,
    create_tenant_repo,
)
from tenantorders.web.middleware import RequestIDMiddleware
from tenantorders.web.routes.auth import router as auth_router
from tenantorders.web.routes.demo import router as demo_router
from tenantorders.web.routes.orders import router as orders_router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = structlog.get_logger(__name__)

ERROR_STATUS_CODES: dict[type[TenantOrdersError], int] = {
    ValidationError: 422,
    OrderNotFoundError: 404,
    CrossTenantAccessError: 403,
    PermissionDeniedError: 403,
    ConflictError: 409,
    StorageError: 503,
}


def status_code_for(exc: TenantOrdersError) -> int:
    for exc_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return 500


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    if settings.use_database:
        from tenantorders.storage.database import init_db

        await init_db()
    if settings.seed_on_startup:
        await seed_demo_data(settings.tenants, app.state.tenant_repo, app.state.order_store)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(log_level=settings.log_level, json_output=not settings.debug)

    app = FastAPI(
        title="tenantorders",
        description="Multi-tenant order management with role-based authorization",
        version="0.1.0",
        lifespan=_lifespan,
    )

    app.state.order_store = create_order_store(settings)
    app.state.tenant_repo = create_tenant_repo(settings)
    app.state.order_service = create_order_service(settings, app.state.order_store)
    app.state.session_auth = SessionAuth(secret_key=settings.secret_key)

    @app.exception_handler(TenantOrdersError)
    async def domain_error_handler(request: Request, exc: TenantOrdersError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=str(exc), kind=exc.kind)
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error": exc.kind},
        )

    app.add_middleware(RequestIDMiddleware)

    app.include_router(auth_router)
    app.include_router(orders_router)
    app.include_router(demo_router)

    @app.get("/api/health")
    async def health_check() -> dict[str, object]:
        from tenantorders.web.health import check_health

        return await check_health()

    logger.info("app_created", use_database=settings.use_database)
    return app
