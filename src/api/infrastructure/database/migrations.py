"""Programmatic access to the alembic migrations.

Tenant provisioning runs migrations from inside the service rather than
through the alembic CLI, so the configuration is built here instead of
being read from alembic.ini.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from alembic.config import Config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

MIGRATIONS_PATH = Path(__file__).resolve().parent.parent / "migrations"


def build_alembic_config(connection: Connection | None = None) -> Config:
    """Build an alembic Config pointing at the bundled migrations.

    Args:
        connection: Open synchronous connection to migrate. When given,
            env.py runs the migrations on it instead of creating an engine.

    Returns:
        Alembic configuration
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    if connection is not None:
        config.attributes["connection"] = connection
    return config
