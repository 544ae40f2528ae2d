"""Main FastAPI application entry point."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from iam import presentation as iam_presentation
from iam.ports.exceptions import TenantAccessVerificationError
from infrastructure.database.dependencies import close_database_connections
from infrastructure.database.engines import build_listen_dsn
from infrastructure.invalidation import PostgresNotifyInvalidationListener
from infrastructure.invalidation.dependencies import get_invalidation_broadcaster
from infrastructure.logging import configure_logging
from infrastructure.settings import (
    get_database_settings,
    get_settings,
    get_tenancy_settings,
)
from infrastructure.version import __version__
from organization import presentation as organization_presentation


@asynccontextmanager
async def run_invalidation_listener(app: FastAPI):
    """Forward database invalidation notifications for the app's lifetime."""
    listener = PostgresNotifyInvalidationListener(
        db_url=build_listen_dsn(get_database_settings()),
        broadcaster=get_invalidation_broadcaster(),
        channel=get_tenancy_settings().invalidation_channel,
    )
    task = asyncio.create_task(listener.start())

    yield

    await listener.stop()
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


@asynccontextmanager
async def shiftboard_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - structlog configuration
    - Invalidation listener startup and shutdown
    - Database engines (created lazily, disposed on shutdown)
    """
    configure_logging(get_settings().log_level)

    async with run_invalidation_listener(app):
        yield

    await close_database_connections()


_settings = get_settings()

app = FastAPI(
    title=_settings.app_name,
    debug=_settings.debug,
    description="Multi-tenant workforce operations",
    version=__version__,
    lifespan=shiftboard_lifespan,
)

app.include_router(iam_presentation.router)
app.include_router(organization_presentation.router)


@app.exception_handler(TenantAccessVerificationError)
async def access_verification_failed(
    request: Request, exc: TenantAccessVerificationError
) -> JSONResponse:
    """Collaborator failures are never reported as 401 or 403."""
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
