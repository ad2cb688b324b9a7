"""Database-specific exceptions shared by all bounded contexts."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when a database connection cannot be established."""

    def __init__(self, message: str, database: str | None = None):
        super().__init__(message)
        self.database = database


class SchemaProvisioningError(DatabaseError):
    """Raised when a tenant schema cannot be brought up to date."""

    def __init__(self, message: str, database: str | None = None):
        super().__init__(message)
        self.database = database
