"""User-client association domain events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from clients.domain.events.source import EVENT_SOURCE


@dataclass(frozen=True)
class UserAssignedToClient:
    """Event raised when an external user is assigned to a client.

    Attributes:
        association_id: The ULID of the new association
        user_id: Identity-service id of the user
        client_id: The ULID of the client
        tenant_id: The tenant both belong to
        assigned_by: Actor who made the assignment
        correlation_id: Identifier threading this operation
        occurred_at: When the event occurred (UTC)
        source: Service that published the event
    """

    association_id: str
    user_id: str
    client_id: str
    tenant_id: str
    assigned_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE


@dataclass(frozen=True)
class UserRemovedFromClient:
    """Event raised when a user's assignment to a client is removed."""

    user_id: str
    client_id: str
    tenant_id: str
    removed_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE
