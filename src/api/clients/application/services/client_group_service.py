"""Client group application service for the Client Management bounded context.

Orchestrates group lifecycle and client memberships.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from clients.application.observability import (
    ClientGroupServiceProbe,
    DefaultClientGroupServiceProbe,
)
from clients.application.services.publishing import publish_committed
from clients.domain.aggregates import Client, ClientGroup
from clients.domain.value_objects import (
    ClientGroupId,
    ClientId,
    DuplicateValue,
    Page,
    Pagination,
    resolve_actor,
)
from clients.ports.exceptions import DuplicateClientGroupNameError
from clients.ports.repositories import IClientGroupRepository, IClientRepository
from shared_kernel.messaging import IEventPublisher


class ClientGroupService:
    """Application service for client groups and memberships.

    Membership changes are idempotent. Events are published only when a
    membership row was actually inserted or removed.
    """

    def __init__(
        self,
        session: AsyncSession,
        group_repository: IClientGroupRepository,
        client_repository: IClientRepository,
        publisher: IEventPublisher,
        actor: str | None = None,
        probe: ClientGroupServiceProbe | None = None,
    ):
        """Initialize ClientGroupService with dependencies.

        Args:
            session: Database session for transaction management
            group_repository: Repository for groups and memberships
            client_repository: Repository used to check clients exist
            publisher: Message bus port for domain events
            actor: Identity resolved from the request
            probe: Optional domain probe for observability
        """
        self._session = session
        self._group_repository = group_repository
        self._client_repository = client_repository
        self._publisher = publisher
        self._actor = actor
        self._probe = probe or DefaultClientGroupServiceProbe()

    async def create_group(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        actor: str | None = None,
    ) -> ClientGroup | DuplicateValue:
        """Create a group whose name is unused among the tenant's live groups.

        Raises:
            ValueError: If the name is blank
        """
        actor = resolve_actor(actor, self._actor)
        group = ClientGroup.create(
            tenant_id=tenant_id, name=name, actor=actor, description=description
        )
        try:
            async with self._session.begin():
                if await self._group_repository.name_exists(group.name, tenant_id):
                    return self._duplicate_name(group.name, tenant_id)
                created = await self._group_repository.create(group)
        except DuplicateClientGroupNameError as e:
            return self._duplicate_name(e.name, tenant_id)

        self._probe.group_created(created.id.value, created.name, tenant_id)
        await publish_committed(self._publisher, group.collect_events(), self._probe)
        return created

    async def get_group(
        self, group_id: ClientGroupId, tenant_id: str
    ) -> ClientGroup | None:
        return await self._group_repository.get_by_id(group_id, tenant_id)

    async def update_group(
        self,
        group_id: ClientGroupId,
        tenant_id: str,
        name: str,
        description: str | None = None,
        actor: str | None = None,
    ) -> ClientGroup | DuplicateValue | None:
        """Replace a group's name and description.

        Returns:
            The updated group, a DuplicateValue when the new name is taken,
            or None when the group does not exist in the tenant

        Raises:
            ValueError: If the name is blank
        """
        actor = resolve_actor(actor, self._actor)
        try:
            async with self._session.begin():
                group = await self._group_repository.get_by_id(group_id, tenant_id)
                if group is None:
                    return None

                new_name = name.strip()
                if new_name != group.name and await self._group_repository.name_exists(
                    new_name, tenant_id, exclude_id=group_id
                ):
                    return self._duplicate_name(new_name, tenant_id)

                group.update(name=name, description=description, actor=actor)
                updated = await self._group_repository.update(group)
                if updated is None:
                    return None
        except DuplicateClientGroupNameError as e:
            return self._duplicate_name(e.name, tenant_id)

        self._probe.group_updated(group_id.value, updated.name, tenant_id)
        await publish_committed(self._publisher, group.collect_events(), self._probe)
        return updated

    async def delete_group(
        self,
        group_id: ClientGroupId,
        tenant_id: str,
        actor: str | None = None,
    ) -> bool:
        """Soft-delete a group; False if it does not exist in the tenant."""
        actor = resolve_actor(actor, self._actor)
        async with self._session.begin():
            group = await self._group_repository.get_by_id(group_id, tenant_id)
            if group is None:
                return False

            group.mark_for_deletion(actor)
            if not await self._group_repository.delete(group_id, tenant_id, actor):
                return False

        self._probe.group_deleted(group_id.value, tenant_id)
        await publish_committed(self._publisher, group.collect_events(), self._probe)
        return True

    async def list_groups(
        self,
        tenant_id: str,
        page: int | None = None,
        page_size: int | None = None,
        search_term: str | None = None,
    ) -> Page[ClientGroup]:
        pagination = Pagination.of(page, page_size)
        items, total_count = await self._group_repository.list(
            tenant_id, pagination, search_term
        )
        return Page(items=items, total_count=total_count, pagination=pagination)

    async def add_client_to_group(
        self,
        group_id: ClientGroupId,
        client_id: ClientId,
        tenant_id: str,
        actor: str | None = None,
    ) -> bool:
        """Add a client to a group.

        Adding a client that is already a member, or that a concurrent
        request added first, succeeds without publishing anything.

        Returns:
            True once the client is a member, False if the group or the
            client does not exist in the tenant
        """
        actor = resolve_actor(actor, self._actor)
        async with self._session.begin():
            group = await self._load_membership_target(group_id, client_id, tenant_id)
            if group is None:
                return False

            if await self._group_repository.is_member(group_id, client_id):
                return True

            membership = group.new_membership(client_id, actor)
            if not await self._group_repository.add_membership(membership):
                return True
            group.add_client(client_id, actor)

        self._probe.client_added_to_group(group_id.value, client_id.value, tenant_id)
        await publish_committed(self._publisher, group.collect_events(), self._probe)
        return True

    async def remove_client_from_group(
        self,
        group_id: ClientGroupId,
        client_id: ClientId,
        tenant_id: str,
        actor: str | None = None,
    ) -> bool:
        """Remove a client from a group.

        Returns:
            True if a membership was removed, False if the group or client
            does not exist in the tenant or the client was not a member
        """
        actor = resolve_actor(actor, self._actor)
        async with self._session.begin():
            group = await self._load_membership_target(group_id, client_id, tenant_id)
            if group is None:
                return False

            if not await self._group_repository.remove_membership(group_id, client_id):
                return False
            group.remove_client(client_id, actor)

        self._probe.client_removed_from_group(
            group_id.value, client_id.value, tenant_id
        )
        await publish_committed(self._publisher, group.collect_events(), self._probe)
        return True

    async def get_group_clients(
        self, group_id: ClientGroupId, tenant_id: str
    ) -> list[Client]:
        return await self._group_repository.list_group_clients(group_id, tenant_id)

    async def get_client_groups(
        self, client_id: ClientId, tenant_id: str
    ) -> list[ClientGroup]:
        return await self._group_repository.list_client_groups(client_id, tenant_id)

    async def is_client_in_group(
        self, group_id: ClientGroupId, client_id: ClientId, tenant_id: str
    ) -> bool:
        """Whether a live client of the tenant is a member of a live group."""
        group = await self._group_repository.get_by_id(group_id, tenant_id)
        client = await self._client_repository.get_by_id(client_id, tenant_id)
        if group is None or client is None:
            return False
        return await self._group_repository.is_member(group_id, client_id)

    async def _load_membership_target(
        self, group_id: ClientGroupId, client_id: ClientId, tenant_id: str
    ) -> ClientGroup | None:
        group = await self._group_repository.get_by_id(group_id, tenant_id)
        client = await self._client_repository.get_by_id(client_id, tenant_id)
        if group is None or client is None:
            self._probe.membership_target_not_found(
                group_id.value, client_id.value, tenant_id
            )
            return None
        return group

    def _duplicate_name(self, name: str, tenant_id: str) -> DuplicateValue:
        self._probe.duplicate_group_name_rejected(name, tenant_id)
        return DuplicateValue(field="name", value=name)
