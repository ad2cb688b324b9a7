"""Ports for provisioning a tenant database.

The initialization saga step connects to a tenant's own database, brings
its schema up to date and seeds it. These protocols keep that flow
independent of the migration tool and the engine lifecycle.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from enum import StrEnum
from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession


class SchemaState(StrEnum):
    """Outcome of ensuring a tenant schema."""

    MIGRATED = "migrated"
    """Migrations were applied, or the schema was already at head."""

    UNTRACKED = "untracked"
    """Tables exist without migration history and were left untouched."""


@runtime_checkable
class ITenantDatabase(Protocol):
    """An open connection target for one tenant database."""

    @property
    def database_name(self) -> str: ...

    async def ensure_schema(self) -> SchemaState:
        """Apply pending migrations; a no-op when already current."""
        ...

    def session(self) -> AbstractAsyncContextManager[AsyncSession]:
        """Open a session on the tenant database."""
        ...


@runtime_checkable
class ITenantDatabaseFactory(Protocol):
    """Opens tenant databases by name using the shared connection settings."""

    def open(self, database_name: str) -> AbstractAsyncContextManager[ITenantDatabase]:
        """Connect to the tenant database, disposing the connection on exit."""
        ...
