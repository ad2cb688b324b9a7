"""Tenant initialization events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from clients.domain.events.source import EVENT_SOURCE


@dataclass(frozen=True)
class ClientManagementInitialized:
    """Completion event of the tenant provisioning saga step.

    Published on every successful handling of the initialization command,
    including redeliveries, so the saga coordinator always hears back.

    Attributes:
        tenant_id: The provisioned tenant
        schema_created: Whether the tenant schema is in place
        initialized_at: When provisioning finished (UTC)
        correlation_id: Correlation id of the originating command
        occurred_at: When the event occurred (UTC)
        source: Service that published the event
    """

    tenant_id: str
    schema_created: bool
    initialized_at: datetime
    correlation_id: str
    occurred_at: datetime
    source: str = EVENT_SOURCE
