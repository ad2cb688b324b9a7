"""Client group domain events.

Covers the group lifecycle and client membership changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from clients.domain.events.source import EVENT_SOURCE


@dataclass(frozen=True)
class ClientGroupCreated:
    """Event raised when a new client group is created."""

    group_id: str
    tenant_id: str
    name: str
    description: str | None
    created_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE


@dataclass(frozen=True)
class ClientGroupUpdated:
    """Event raised when a client group is renamed or re-described."""

    group_id: str
    tenant_id: str
    name: str
    description: str | None
    updated_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE


@dataclass(frozen=True)
class ClientGroupDeleted:
    """Event raised when a client group is soft-deleted."""

    group_id: str
    tenant_id: str
    deleted_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE


@dataclass(frozen=True)
class ClientAddedToGroup:
    """Event raised when a client joins a group.

    Only raised when a membership row was actually inserted; adding a
    client that is already a member raises nothing.
    """

    group_id: str
    client_id: str
    tenant_id: str
    added_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE


@dataclass(frozen=True)
class ClientRemovedFromGroup:
    """Event raised when a client leaves a group."""

    group_id: str
    client_id: str
    tenant_id: str
    removed_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE
