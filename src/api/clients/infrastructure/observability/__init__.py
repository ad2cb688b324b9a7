"""Domain-Oriented Observability for Client Management infrastructure."""

from clients.infrastructure.observability.repository_probe import (
    ClientGroupRepositoryProbe,
    ClientRepositoryProbe,
    DefaultClientGroupRepositoryProbe,
    DefaultClientRepositoryProbe,
    DefaultUserClientAssociationRepositoryProbe,
    UserClientAssociationRepositoryProbe,
)

__all__ = [
    "ClientGroupRepositoryProbe",
    "ClientRepositoryProbe",
    "DefaultClientGroupRepositoryProbe",
    "DefaultClientRepositoryProbe",
    "DefaultUserClientAssociationRepositoryProbe",
    "UserClientAssociationRepositoryProbe",
]
