"""Client application service for the Client Management bounded context.

Orchestrates client creation, replacement and soft deletion with tenant
uniqueness checks on the business identifiers.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from clients.application.observability import (
    ClientServiceProbe,
    DefaultClientServiceProbe,
)
from clients.application.services.publishing import publish_committed
from clients.domain.aggregates import Client, ClientDetails
from clients.domain.value_objects import (
    ClientId,
    DuplicateValue,
    Page,
    Pagination,
    resolve_actor,
)
from clients.ports.exceptions import DuplicateClientIdentifierError
from clients.ports.repositories import IClientRepository
from shared_kernel.messaging import IEventPublisher


class ClientService:
    """Application service for client management.

    Every write runs in its own transaction. Domain events collected from
    the aggregate are published only after that transaction commits.
    """

    def __init__(
        self,
        session: AsyncSession,
        client_repository: IClientRepository,
        publisher: IEventPublisher,
        actor: str | None = None,
        probe: ClientServiceProbe | None = None,
    ):
        """Initialize ClientService with dependencies.

        Args:
            session: Database session for transaction management
            client_repository: Repository for client persistence
            publisher: Message bus port for domain events
            actor: Identity resolved from the request, used when a call
                supplies no explicit actor
            probe: Optional domain probe for observability
        """
        self._session = session
        self._client_repository = client_repository
        self._publisher = publisher
        self._actor = actor
        self._probe = probe or DefaultClientServiceProbe()

    async def create_client(
        self,
        tenant_id: str,
        details: ClientDetails,
        actor: str | None = None,
    ) -> Client | DuplicateValue:
        """Create a client after checking its identifiers are free in the tenant.

        Args:
            tenant_id: Tenant the client belongs to
            details: The client's fields
            actor: Explicit actor, overriding the request identity

        Returns:
            The created client, or the first conflicting identifier
        """
        actor = resolve_actor(actor, self._actor)
        try:
            async with self._session.begin():
                duplicate = await self._find_duplicate(details, tenant_id)
                if duplicate is not None:
                    return duplicate

                client = Client.create(
                    tenant_id=tenant_id, details=details, actor=actor
                )
                created = await self._client_repository.create(client)
        except DuplicateClientIdentifierError as e:
            # A concurrent create won the race past the pre-check
            return self._duplicate(e.field, e.value, tenant_id)

        self._probe.client_created(created.id.value, tenant_id, actor)
        await publish_committed(self._publisher, client.collect_events(), self._probe)
        return created

    async def get_client(self, client_id: ClientId, tenant_id: str) -> Client | None:
        """Get a live client of the tenant, or None."""
        return await self._client_repository.get_by_id(client_id, tenant_id)

    async def update_client(
        self,
        client_id: ClientId,
        tenant_id: str,
        details: ClientDetails,
        actor: str | None = None,
    ) -> Client | DuplicateValue | None:
        """Replace every editable field of a client.

        Identifier uniqueness is checked against the tenant's other live
        clients, so a client may keep its own identifiers.

        Returns:
            The updated client, the first conflicting identifier, or None
            when the client does not exist in the tenant
        """
        actor = resolve_actor(actor, self._actor)
        try:
            async with self._session.begin():
                client = await self._client_repository.get_by_id(client_id, tenant_id)
                if client is None:
                    self._probe.client_not_found(client_id.value, tenant_id)
                    return None

                duplicate = await self._find_duplicate(
                    details, tenant_id, exclude_id=client_id
                )
                if duplicate is not None:
                    return duplicate

                client.update(details, actor)
                updated = await self._client_repository.update(client)
                if updated is None:
                    self._probe.client_not_found(client_id.value, tenant_id)
                    return None
        except DuplicateClientIdentifierError as e:
            return self._duplicate(e.field, e.value, tenant_id)

        self._probe.client_updated(client_id.value, tenant_id, actor)
        await publish_committed(self._publisher, client.collect_events(), self._probe)
        return updated

    async def delete_client(
        self,
        client_id: ClientId,
        tenant_id: str,
        actor: str | None = None,
    ) -> bool:
        """Soft-delete a client.

        Returns:
            True if the client was deleted, False if it was not found
        """
        actor = resolve_actor(actor, self._actor)
        async with self._session.begin():
            client = await self._client_repository.get_by_id(client_id, tenant_id)
            if client is None:
                self._probe.client_not_found(client_id.value, tenant_id)
                return False

            client.mark_for_deletion(actor)
            deleted = await self._client_repository.delete(client_id, tenant_id, actor)
            if not deleted:
                self._probe.client_not_found(client_id.value, tenant_id)
                return False

        self._probe.client_deleted(client_id.value, tenant_id, actor)
        await publish_committed(self._publisher, client.collect_events(), self._probe)
        return True

    async def list_clients(
        self,
        tenant_id: str,
        page: int | None = None,
        page_size: int | None = None,
        search_term: str | None = None,
    ) -> Page[Client]:
        """List the tenant's live clients, one normalized page at a time."""
        pagination = Pagination.of(page, page_size)
        items, total_count = await self._client_repository.list(
            tenant_id, pagination, search_term
        )
        return Page(items=items, total_count=total_count, pagination=pagination)

    async def _find_duplicate(
        self,
        details: ClientDetails,
        tenant_id: str,
        exclude_id: ClientId | None = None,
    ) -> DuplicateValue | None:
        checks = {
            "ice_number": self._client_repository.ice_number_exists,
            "rc_number": self._client_repository.rc_number_exists,
            "vat_number": self._client_repository.vat_number_exists,
            "cnss_number": self._client_repository.cnss_number_exists,
        }
        for field, value in details.identifiers().items():
            if await checks[field](value, tenant_id, exclude_id):
                return self._duplicate(field, value, tenant_id)
        return None

    def _duplicate(self, field: str, value: str, tenant_id: str) -> DuplicateValue:
        self._probe.duplicate_identifier_rejected(field, value, tenant_id)
        return DuplicateValue(field=field, value=value)
