"""Database dependency injection for FastAPI.

Provides the async session dependency. The engine is a process
singleton created on first use.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings, get_database_settings

_probe = DefaultConnectionProbe()

# Guards lazy engine creation
_engine_lock = threading.Lock()


class _EngineSlot:
    """Holds one lazily created engine and its sessionmaker."""

    def __init__(self, name: str, factory) -> None:
        self.name = name
        self._factory = factory
        self.engine: AsyncEngine | None = None
        self.sessionmaker: async_sessionmaker[AsyncSession] | None = None

    def ensure(self, settings: DatabaseSettings) -> AsyncEngine:
        if self.engine is None:
            with _engine_lock:
                # Double-check after acquiring lock
                if self.engine is None:
                    engine = self._factory(settings)
                    self.sessionmaker = async_sessionmaker(
                        engine,
                        expire_on_commit=False,
                        class_=AsyncSession,
                    )
                    self.engine = engine
                    _probe.pool_initialized(
                        name=self.name,
                        host=settings.host,
                        database=settings.database,
                        max_conn=settings.pool_max_connections,
                    )
        return self.engine

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            _probe.pool_closed(name=self.name)
            self.engine = None
            self.sessionmaker = None


_write = _EngineSlot("write", create_write_engine)


def get_write_engine() -> AsyncEngine:
    """Get the write database engine (singleton)."""
    return _write.ensure(get_database_settings())


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a write session for mutations (FastAPI dependency).

    The session does NOT auto-commit. Services manage transactions with
    ``async with session.begin()``.

    Yields:
        AsyncSession for database operations
    """
    get_write_engine()
    assert _write.sessionmaker is not None

    async with _write.sessionmaker() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose the shared engine.

    Called on application shutdown. The engine is recreated on next use.
    """
    await _write.dispose()
