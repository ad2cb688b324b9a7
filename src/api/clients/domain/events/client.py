"""Client domain events.

Each event carries a full snapshot of the client fields so consumers
never need to call back into this service.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from clients.domain.events.source import EVENT_SOURCE


@dataclass(frozen=True)
class ClientSnapshot:
    """Immutable snapshot of a client's mutable fields at a point in time.

    Attributes mirror ``ClientDetails``; status is the status value and
    fiscal_year_end an ISO date string.
    """

    company_name: str
    country: str | None
    address: str | None
    ice_number: str | None
    rc_number: str | None
    vat_number: str | None
    cnss_number: str | None
    industry: str | None
    admin_contact_person: str | None
    billing_contact_person: str | None
    status: str
    fiscal_year_end: str | None
    assigned_team_id: str | None


@dataclass(frozen=True)
class ClientCreated:
    """Event raised when a new client is created.

    Attributes:
        client_id: The ULID of the created client
        tenant_id: The tenant the client belongs to
        client: Snapshot of the client fields
        created_by: Actor who created the client
        correlation_id: Identifier threading this operation
        occurred_at: When the event occurred (UTC)
        source: Service that published the event
    """

    client_id: str
    tenant_id: str
    client: ClientSnapshot
    created_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE


@dataclass(frozen=True)
class ClientUpdated:
    """Event raised when a client's fields are replaced.

    Attributes:
        client_id: The ULID of the updated client
        tenant_id: The tenant the client belongs to
        client: Snapshot of the client fields after the update
        updated_by: Actor who updated the client
        correlation_id: Identifier threading this operation
        occurred_at: When the event occurred (UTC)
        source: Service that published the event
    """

    client_id: str
    tenant_id: str
    client: ClientSnapshot
    updated_by: str
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE


@dataclass(frozen=True)
class ClientDeleted:
    """Event raised when a client is soft-deleted."""

    client_id: str
    tenant_id: str
    deleted_by: str
    deleted_at: datetime
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE
