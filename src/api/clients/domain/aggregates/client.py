"""Client aggregate for the Client Management context."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from clients.domain.events import (
    ClientCreated,
    ClientDeleted,
    ClientSnapshot,
    ClientUpdated,
)
from clients.domain.validation import normalize_identifier, normalize_rc
from clients.domain.value_objects import (
    ClientId,
    ClientStatus,
    new_correlation_id,
)

if TYPE_CHECKING:
    from clients.domain.events import DomainEvent


@dataclass(frozen=True)
class ClientDetails:
    """The full set of caller-editable client fields.

    Updates replace every field at once, so create and update both take a
    complete ``ClientDetails``. Business identifiers are stored normalized:
    trimmed, RC upper-cased, and blank values turned into None so they
    never take part in uniqueness checks.
    """

    company_name: str
    country: str | None = None
    address: str | None = None
    ice_number: str | None = None
    rc_number: str | None = None
    vat_number: str | None = None
    cnss_number: str | None = None
    industry: str | None = None
    admin_contact_person: str | None = None
    billing_contact_person: str | None = None
    status: ClientStatus = ClientStatus.ACTIVE
    fiscal_year_end: date | None = None
    assigned_team_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "ice_number", normalize_identifier(self.ice_number))
        object.__setattr__(self, "rc_number", normalize_rc(self.rc_number))
        object.__setattr__(self, "vat_number", normalize_identifier(self.vat_number))
        object.__setattr__(
            self, "cnss_number", normalize_identifier(self.cnss_number)
        )

    def identifiers(self) -> dict[str, str]:
        """Present business identifiers keyed by field name, in check order."""
        candidates = {
            "ice_number": self.ice_number,
            "rc_number": self.rc_number,
            "vat_number": self.vat_number,
            "cnss_number": self.cnss_number,
        }
        return {name: value for name, value in candidates.items() if value}

    def snapshot(self) -> ClientSnapshot:
        values = asdict(self)
        values["status"] = self.status.value
        values["fiscal_year_end"] = (
            self.fiscal_year_end.isoformat() if self.fiscal_year_end else None
        )
        return ClientSnapshot(**values)


@dataclass
class Client:
    """Client aggregate: a tenant's customer record.

    Business rules:
    - Business identifiers are unique per tenant among live clients
      (enforced by the application service and the storage layer)
    - Clients are never hard-deleted; deletion records who and when
    - A deleted client cannot be updated or deleted again

    Event collection:
    - create, update and mark_for_deletion record domain events
    - Events are collected via collect_events() and published after commit
    """

    id: ClientId
    tenant_id: str
    details: ClientDetails
    is_deleted: bool = False
    deleted_at: datetime | None = None
    deleted_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    @classmethod
    def create(cls, tenant_id: str, details: ClientDetails, actor: str) -> Client:
        """Factory method for creating a new client.

        Generates the ID, initializes the aggregate, and records the
        ClientCreated event.

        Args:
            tenant_id: The tenant this client belongs to
            details: The client's fields
            actor: Who is creating the client

        Returns:
            A new Client aggregate with ClientCreated recorded
        """
        client = cls(id=ClientId.generate(), tenant_id=tenant_id, details=details)
        client._pending_events.append(
            ClientCreated(
                client_id=client.id.value,
                tenant_id=tenant_id,
                client=details.snapshot(),
                created_by=actor,
                correlation_id=new_correlation_id(),
                occurred_at=datetime.now(UTC),
            )
        )
        return client

    @property
    def status(self) -> ClientStatus:
        return self.details.status

    def update(self, details: ClientDetails, actor: str) -> None:
        """Replace every editable field.

        Raises:
            ValueError: If the client has been deleted
        """
        if self.is_deleted:
            raise ValueError(f"Client {self.id} is deleted")

        self.details = details
        self._pending_events.append(
            ClientUpdated(
                client_id=self.id.value,
                tenant_id=self.tenant_id,
                client=details.snapshot(),
                updated_by=actor,
                correlation_id=new_correlation_id(),
                occurred_at=datetime.now(UTC),
            )
        )

    def mark_for_deletion(self, actor: str) -> None:
        """Soft-delete the client and record ClientDeleted.

        Raises:
            ValueError: If the client is already deleted
        """
        if self.is_deleted:
            raise ValueError(f"Client {self.id} is already deleted")

        now = datetime.now(UTC)
        self.is_deleted = True
        self.deleted_at = now
        self.deleted_by = actor
        self._pending_events.append(
            ClientDeleted(
                client_id=self.id.value,
                tenant_id=self.tenant_id,
                deleted_by=actor,
                deleted_at=now,
                correlation_id=new_correlation_id(),
                occurred_at=now,
            )
        )

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
