"""ClientGroup aggregate for the Client Management context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from clients.domain.events import (
    ClientAddedToGroup,
    ClientGroupCreated,
    ClientGroupDeleted,
    ClientGroupUpdated,
    ClientRemovedFromGroup,
)
from clients.domain.value_objects import (
    ClientGroupId,
    ClientId,
    new_correlation_id,
)

if TYPE_CHECKING:
    from clients.domain.events import DomainEvent

DEFAULT_CLIENT_GROUPS: tuple[tuple[str, str], ...] = (
    ("Premium", "Premium clients with comprehensive service packages"),
    ("Standard", "Standard clients with regular service packages"),
    ("Basic", "Basic clients with essential service packages"),
    ("VIP", "VIP clients with priority support and premium services"),
)
"""Groups seeded into every newly provisioned tenant."""


@dataclass(frozen=True)
class ClientGroupMembership:
    """A client's membership in a group.

    Memberships are plain join rows: removing one deletes it outright.
    """

    group_id: ClientGroupId
    client_id: ClientId
    joined_at: datetime
    added_by: str | None = None


@dataclass
class ClientGroup:
    """ClientGroup aggregate: a named, tenant-scoped bucket of clients.

    Business rules:
    - Names are unique per tenant among live groups
    - Groups are soft-deleted like clients

    Membership rows are persisted by the group repository; the aggregate
    only records the corresponding events.
    """

    id: ClientGroupId
    tenant_id: str
    name: str
    description: str | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None
    deleted_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(
        cls,
        tenant_id: str,
        name: str,
        actor: str,
        description: str | None = None,
    ) -> ClientGroup:
        """Factory method for creating a new group.

        Records the ClientGroupCreated event.

        Raises:
            ValueError: If the name is blank
        """
        group = cls(
            id=ClientGroupId.generate(),
            tenant_id=tenant_id,
            name=_require_name(name),
            description=description,
        )
        group._pending_events.append(
            ClientGroupCreated(
                group_id=group.id.value,
                tenant_id=tenant_id,
                name=group.name,
                description=description,
                created_by=actor,
                correlation_id=new_correlation_id(),
                occurred_at=datetime.now(UTC),
            )
        )
        return group

    @classmethod
    def defaults_for(cls, tenant_id: str) -> list[ClientGroup]:
        """Build the default groups for a new tenant.

        Seeding is part of provisioning, which announces itself with a
        single completion event, so no per-group events are recorded.
        """
        return [
            cls(
                id=ClientGroupId.generate(),
                tenant_id=tenant_id,
                name=name,
                description=description,
            )
            for name, description in DEFAULT_CLIENT_GROUPS
        ]

    def update(self, name: str, description: str | None, actor: str) -> None:
        """Replace name and description.

        Raises:
            ValueError: If the group is deleted or the name is blank
        """
        if self.is_deleted:
            raise ValueError(f"Client group {self.id} is deleted")

        self.name = _require_name(name)
        self.description = description
        self._pending_events.append(
            ClientGroupUpdated(
                group_id=self.id.value,
                tenant_id=self.tenant_id,
                name=self.name,
                description=description,
                updated_by=actor,
                correlation_id=new_correlation_id(),
                occurred_at=datetime.now(UTC),
            )
        )

    def mark_for_deletion(self, actor: str) -> None:
        """Soft-delete the group and record ClientGroupDeleted.

        Raises:
            ValueError: If the group is already deleted
        """
        if self.is_deleted:
            raise ValueError(f"Client group {self.id} is already deleted")

        now = datetime.now(UTC)
        self.is_deleted = True
        self.deleted_at = now
        self.deleted_by = actor
        self._pending_events.append(
            ClientGroupDeleted(
                group_id=self.id.value,
                tenant_id=self.tenant_id,
                deleted_by=actor,
                correlation_id=new_correlation_id(),
                occurred_at=now,
            )
        )

    def new_membership(self, client_id: ClientId, actor: str) -> ClientGroupMembership:
        """Build the membership row for a client joining this group."""
        return ClientGroupMembership(
            group_id=self.id,
            client_id=client_id,
            joined_at=datetime.now(UTC),
            added_by=actor,
        )

    def add_client(self, client_id: ClientId, actor: str) -> None:
        """Record that a client joined this group.

        Call once the membership row was actually inserted.
        """
        self._pending_events.append(
            ClientAddedToGroup(
                group_id=self.id.value,
                client_id=client_id.value,
                tenant_id=self.tenant_id,
                added_by=actor,
                correlation_id=new_correlation_id(),
                occurred_at=datetime.now(UTC),
            )
        )

    def remove_client(self, client_id: ClientId, actor: str) -> None:
        """Record that a client left this group."""
        self._pending_events.append(
            ClientRemovedFromGroup(
                group_id=self.id.value,
                client_id=client_id.value,
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


def _require_name(name: str) -> str:
    stripped = name.strip()
    if not stripped:
        raise ValueError("Client group name cannot be empty")
    return stripped
