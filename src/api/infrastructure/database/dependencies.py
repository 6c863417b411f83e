"""Database session providers for FastAPI dependency injection.

Engines are created lazily, one per role, and shared by all requests.
Sessions never begin a transaction themselves: application services own
the transaction boundary with ``async with session.begin()``.
"""

from __future__ import annotations

import threading
from collections.abc import AsyncGenerator, Callable
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine, create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings, get_database_settings

Role = Literal["write", "read"]

_ENGINE_FACTORIES: dict[Role, Callable[[DatabaseSettings], AsyncEngine]] = {
    "write": create_write_engine,
    "read": create_read_engine,
}

_probe = DefaultConnectionProbe()

_engines: dict[Role, AsyncEngine] = {}
_sessionmakers: dict[Role, async_sessionmaker[AsyncSession]] = {}

_engine_lock = threading.Lock()


def _sessionmaker(role: Role) -> async_sessionmaker[AsyncSession]:
    if role not in _sessionmakers:
        with _engine_lock:
            if role not in _sessionmakers:
                settings = get_database_settings()
                engine = _ENGINE_FACTORIES[role](settings)
                _engines[role] = engine
                _sessionmakers[role] = async_sessionmaker(
                    engine, expire_on_commit=False, class_=AsyncSession
                )
                _probe.engine_created(
                    role=role,
                    database=settings.database,
                    pool_size=settings.pool_max_connections,
                )
    return _sessionmakers[role]


def get_write_engine() -> AsyncEngine:
    """Get the shared engine for mutations."""
    _sessionmaker("write")
    return _engines["write"]


def get_read_engine() -> AsyncEngine:
    """Get the shared engine for listings and searches."""
    _sessionmaker("read")
    return _engines["read"]


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for a mutating use case (FastAPI dependency).

    The access right change and the identifier rows it persists commit
    together in the service's transaction.
    """
    async with _sessionmaker("write")() as session:
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for read-only use cases (FastAPI dependency)."""
    async with _sessionmaker("read")() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose all engines; called on application shutdown.

    Engines are recreated on next use.
    """
    for role in list(_engines):
        engine = _engines.pop(role)
        _sessionmakers.pop(role, None)
        await engine.dispose()
        _probe.engine_disposed(role=role)
