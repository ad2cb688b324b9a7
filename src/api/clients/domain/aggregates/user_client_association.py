"""UserClientAssociation aggregate for the Client Management context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from clients.domain.events import UserAssignedToClient, UserRemovedFromClient
from clients.domain.value_objects import (
    AssociationId,
    ClientId,
    new_correlation_id,
)

if TYPE_CHECKING:
    from clients.domain.events import DomainEvent


@dataclass
class UserClientAssociation:
    """Assignment of an external user to a client within a tenant.

    The user id belongs to the identity service and is stored as an opaque
    string. A user is assigned to a given client at most once per tenant.
    Associations are hard-deleted on removal.
    """

    id: AssociationId
    user_id: str
    client_id: ClientId
    tenant_id: str
    assigned_at: datetime
    assigned_by: str
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(
        cls,
        user_id: str,
        client_id: ClientId,
        tenant_id: str,
        assigned_by: str,
    ) -> UserClientAssociation:
        """Factory method recording UserAssignedToClient.

        Raises:
            ValueError: If the user id is blank
        """
        if not user_id.strip():
            raise ValueError("User id cannot be empty")

        association = cls(
            id=AssociationId.generate(),
            user_id=user_id.strip(),
            client_id=client_id,
            tenant_id=tenant_id,
            assigned_at=datetime.now(UTC),
            assigned_by=assigned_by,
        )
        association._pending_events.append(
            UserAssignedToClient(
                association_id=association.id.value,
                user_id=association.user_id,
                client_id=client_id.value,
                tenant_id=tenant_id,
                assigned_by=assigned_by,
                correlation_id=new_correlation_id(),
                occurred_at=association.assigned_at,
            )
        )
        return association

    def mark_for_removal(self, actor: str) -> None:
        """Record UserRemovedFromClient ahead of the row being deleted."""
        self._pending_events.append(
            UserRemovedFromClient(
                user_id=self.user_id,
                client_id=self.client_id.value,
                tenant_id=self.tenant_id,
                removed_by=actor,
                correlation_id=new_correlation_id(),
                occurred_at=datetime.now(UTC),
            )
        )

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
