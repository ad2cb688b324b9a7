"""Database infrastructure - shared engines, sessions and model base."""

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    SchemaProvisioningError,
)

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "SchemaProvisioningError",
]
