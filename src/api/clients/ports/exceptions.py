"""Domain exceptions for the Client Management bounded context.

These exceptions are raised by repositories when the storage layer's
unique indexes reject a write that slipped past the application-level
pre-check (two concurrent creates). The application layer converts them
into ``DuplicateValue`` results.
"""


class DuplicateClientIdentifierError(Exception):
    """Raised when a business identifier is already used by a live client."""

    def __init__(self, field: str, value: str):
        super().__init__(f"{field} '{value}' already exists in tenant")
        self.field = field
        self.value = value


class DuplicateClientGroupNameError(Exception):
    """Raised when a group name already exists among the tenant's live groups."""

    def __init__(self, name: str):
        super().__init__(f"Client group '{name}' already exists in tenant")
        self.name = name


class DuplicateUserClientAssociationError(Exception):
    """Raised when the user is already assigned to the client in the tenant."""

    pass
