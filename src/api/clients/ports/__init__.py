"""Ports (interfaces) for the Client Management bounded context.

Ports define the contracts for repositories and external collaborators
without specifying implementation details.
"""

from clients.ports.exceptions import (
    DuplicateClientGroupNameError,
    DuplicateClientIdentifierError,
    DuplicateUserClientAssociationError,
)
from clients.ports.identity import IIdentityService
from clients.ports.provisioning import (
    ITenantDatabase,
    ITenantDatabaseFactory,
    SchemaState,
)
from clients.ports.repositories import (
    IClientGroupRepository,
    IClientRepository,
    IUserClientAssociationRepository,
)

__all__ = [
    "DuplicateClientGroupNameError",
    "DuplicateClientIdentifierError",
    "DuplicateUserClientAssociationError",
    "IClientGroupRepository",
    "IClientRepository",
    "IIdentityService",
    "ITenantDatabase",
    "ITenantDatabaseFactory",
    "IUserClientAssociationRepository",
    "SchemaState",
]
