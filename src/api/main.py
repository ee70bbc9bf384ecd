"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from connectors.infrastructure.providers import GOOGLE, MICROSOFT
from connectors.presentation import integrations_router, oauth_router
from directory.presentation import router as directory_router
from infrastructure.database.dependencies import (
    close_database_connections,
    get_session,
)
from infrastructure.dependencies import close_http_client
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def dirsync_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration and startup reporting
    - Shared outbound HTTP client (created lazily, closed on shutdown)
    - Database engine (created lazily, disposed on shutdown)
    """
    configure_logging()
    probe = DefaultStartupProbe()

    settings = get_settings()
    configured = []
    for provider, section in ((GOOGLE, settings.google), (MICROSOFT, settings.microsoft)):
        if section.client_id:
            configured.append(provider.key)
        else:
            probe.provider_not_configured(provider.key)
    probe.application_started(version=__version__, providers=configured)

    yield

    await close_http_client()
    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title=get_settings().app_name,
    description="Mirrors users and groups from Google Workspace, Microsoft Entra ID and CSV uploads",
    version=__version__,
    lifespan=dirsync_lifespan,
)

app.include_router(oauth_router)
app.include_router(integrations_router)
app.include_router(directory_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> dict:
    """Check database connection health."""
    try:
        async with session.begin():
            await session.execute(text("SELECT 1"))
        return {"status": "ok", "connected": True}
    except (SQLAlchemyError, OSError) as e:
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }
