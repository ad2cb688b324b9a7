"""Domain events for the Client Management bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects that carry all the information needed
to describe the occurrence of an event. Application services publish them
to the message bus after the originating transaction commits.
"""

from clients.domain.events.association import (
    UserAssignedToClient,
    UserRemovedFromClient,
)
from clients.domain.events.client import (
    ClientCreated,
    ClientDeleted,
    ClientSnapshot,
    ClientUpdated,
)
from clients.domain.events.client_group import (
    ClientAddedToGroup,
    ClientGroupCreated,
    ClientGroupDeleted,
    ClientGroupUpdated,
    ClientRemovedFromGroup,
)
from clients.domain.events.initialization import ClientManagementInitialized
from clients.domain.events.source import EVENT_SOURCE

# Type alias for all domain events in the Client Management context
DomainEvent = (
    ClientCreated
    | ClientUpdated
    | ClientDeleted
    | ClientGroupCreated
    | ClientGroupUpdated
    | ClientGroupDeleted
    | ClientAddedToGroup
    | ClientRemovedFromGroup
    | UserAssignedToClient
    | UserRemovedFromClient
    | ClientManagementInitialized
)

__all__ = [
    "EVENT_SOURCE",
    "DomainEvent",
    # Client events
    "ClientCreated",
    "ClientUpdated",
    "ClientDeleted",
    "ClientSnapshot",
    # Group events
    "ClientGroupCreated",
    "ClientGroupUpdated",
    "ClientGroupDeleted",
    "ClientAddedToGroup",
    "ClientRemovedFromGroup",
    # Association events
    "UserAssignedToClient",
    "UserRemovedFromClient",
    # Initialization events
    "ClientManagementInitialized",
]
