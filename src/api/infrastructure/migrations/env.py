"""Alembic environment for the client management schema.

Migrations run in two ways:

- From the alembic CLI against the database configured through
  CLIENTS_DB_* settings.
- Programmatically during tenant provisioning, where the caller passes
  an open connection in ``config.attributes["connection"]``.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from clients.infrastructure.models import (  # noqa: F401 - registers tables
    ClientGroupMembershipModel,
    ClientGroupModel,
    ClientModel,
    UserClientAssociationModel,
)
from infrastructure.database.engines import create_tenant_engine
from infrastructure.database.models import Base
from infrastructure.settings import get_database_settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL to stdout."""
    settings = get_database_settings()
    context.configure(
        url=settings.connection_string,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    settings = get_database_settings()
    engine = create_tenant_engine(settings, settings.database)

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connection = config.attributes.get("connection")
    if connection is None:
        asyncio.run(run_async_migrations())
    else:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
