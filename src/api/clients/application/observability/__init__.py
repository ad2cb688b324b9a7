"""Domain-Oriented Observability for the Client Management application layer."""

from clients.application.observability.association_service_probe import (
    DefaultUserClientAssociationServiceProbe,
    UserClientAssociationServiceProbe,
)
from clients.application.observability.client_group_service_probe import (
    ClientGroupServiceProbe,
    DefaultClientGroupServiceProbe,
)
from clients.application.observability.client_service_probe import (
    ClientServiceProbe,
    DefaultClientServiceProbe,
)
from clients.application.observability.initialization_probe import (
    DefaultInitializationProbe,
    InitializationProbe,
)

__all__ = [
    "ClientServiceProbe",
    "DefaultClientServiceProbe",
    "ClientGroupServiceProbe",
    "DefaultClientGroupServiceProbe",
    "UserClientAssociationServiceProbe",
    "DefaultUserClientAssociationServiceProbe",
    "InitializationProbe",
    "DefaultInitializationProbe",
]
