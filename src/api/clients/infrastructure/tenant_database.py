"""Tenant database access for provisioning.

Each tenant has its own database on the shared server. Provisioning opens
a short-lived engine on it, runs the bundled alembic migrations over that
engine's connection and disposes the engine when done.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from alembic import command
from alembic.util import CommandError
from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from clients.ports.provisioning import (
    ITenantDatabase,
    ITenantDatabaseFactory,
    SchemaState,
)
from infrastructure.database.engines import create_tenant_engine
from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    SchemaProvisioningError,
)
from infrastructure.database.migrations import build_alembic_config
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings

_VERSION_TABLE = "alembic_version"
_MARKER_TABLE = "clients"


class AlembicTenantDatabase(ITenantDatabase):
    """A tenant database whose schema is managed by alembic."""

    def __init__(
        self,
        engine: AsyncEngine,
        database_name: str,
        host: str = "",
        probe: ConnectionProbe | None = None,
    ) -> None:
        self._engine = engine
        self._database_name = database_name
        self._host = host
        self._probe = probe or DefaultConnectionProbe()

    @property
    def database_name(self) -> str:
        return self._database_name

    async def ensure_schema(self) -> SchemaState:
        """Upgrade the schema to the latest revision.

        A database that already has the tables but no alembic history was
        created outside of migrations; it is reported as untracked and left
        unchanged rather than migrated over.

        Raises:
            DatabaseConnectionError: If the database cannot be reached
            SchemaProvisioningError: If inspecting or migrating fails
        """
        try:
            async with self._engine.begin() as connection:
                return await connection.run_sync(self._ensure_schema)
        except OSError as e:
            self._probe.tenant_connection_failed(self._host, self._database_name, e)
            raise DatabaseConnectionError(
                f"Cannot connect to tenant database {self._database_name}: {e}",
                database=self._database_name,
            ) from e
        except (SQLAlchemyError, CommandError) as e:
            raise SchemaProvisioningError(
                f"Schema provisioning failed for {self._database_name}: {e}",
                database=self._database_name,
            ) from e

    def _ensure_schema(self, connection: Connection) -> SchemaState:
        tables = set(inspect(connection).get_table_names())
        if _VERSION_TABLE not in tables and _MARKER_TABLE in tables:
            return SchemaState.UNTRACKED

        command.upgrade(build_alembic_config(connection), "head")
        return SchemaState.MIGRATED

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with AsyncSession(self._engine, expire_on_commit=False) as session:
            yield session


class TenantDatabaseFactory(ITenantDatabaseFactory):
    """Opens tenant databases with the shared host and credentials."""

    def __init__(
        self,
        settings: DatabaseSettings,
        probe: ConnectionProbe | None = None,
    ) -> None:
        self._settings = settings
        self._probe = probe or DefaultConnectionProbe()

    @asynccontextmanager
    async def open(self, database_name: str) -> AsyncIterator[AlembicTenantDatabase]:
        engine = create_tenant_engine(self._settings, database_name)
        self._probe.tenant_connection_opened(self._settings.host, database_name)
        try:
            yield AlembicTenantDatabase(
                engine,
                database_name,
                host=self._settings.host,
                probe=self._probe,
            )
        finally:
            await engine.dispose()
            self._probe.tenant_connection_closed(database_name)
