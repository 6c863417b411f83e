"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import (
    close_database_connections,
    get_read_session,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from serverconf.presentation import router as serverconf_router


@asynccontextmanager
async def serverconf_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Database engines (created lazily, disposed on shutdown)
    """
    configure_logging(debug=get_settings().debug)

    yield

    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Access rights and service clients of security server clients",
    version=__version__,
    lifespan=serverconf_lifespan,
)

app.include_router(serverconf_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> dict:
    """Check database connection health."""
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok", "connected": True}
    except Exception as e:
        return {"status": "error", "connected": False, "error": str(e)}
