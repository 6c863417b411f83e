"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance reachable with the
SERVERCONF_DB_* settings. The schema is brought to the latest Alembic
revision once per session. Run with ``pytest -m integration``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
import pytest_asyncio
from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_write_engine
from infrastructure.settings import DatabaseSettings, get_database_settings

MIGRATIONS_DIR = Path(__file__).parents[2] / "infrastructure" / "migrations"

SERVERCONF_TABLES = (
    "access_right",
    "group_member",
    "local_group",
    "endpoint",
    "service",
    "service_description",
    "client",
    "identifier",
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Connection values come from SERVERCONF_DB_* environment variables. The
    lock timeout is kept short so lock contention tests finish quickly.
    """
    return DatabaseSettings(lock_timeout_ms=1000)


@pytest.fixture(scope="session")
def migrated_database(integration_db_settings: DatabaseSettings) -> None:
    """Upgrade the test database to the latest schema revision.

    The migration environment runs its own event loop, so the upgrade is
    done on a worker thread.
    """
    get_database_settings.cache_clear()
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    with ThreadPoolExecutor(max_workers=1) as executor:
        executor.submit(command.upgrade, config, "head").result()


@pytest_asyncio.fixture
async def session_factory(
    integration_db_settings: DatabaseSettings, migrated_database: None
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide a session factory for tests that need concurrent sessions."""
    engine = create_write_engine(integration_db_settings)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def clean_serverconf_data(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[None, None]:
    """Empty the server configuration tables before and after each test."""
    statement = text(
        f"TRUNCATE {', '.join(SERVERCONF_TABLES)} RESTART IDENTITY CASCADE"
    )

    async with session_factory() as session, session.begin():
        await session.execute(statement)

    yield

    async with session_factory() as session, session.begin():
        await session.execute(statement)
