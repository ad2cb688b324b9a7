"""Fixtures for application service tests.

Provides a mocked session whose transactions are no-ops and in-memory
repositories that honor tenant scoping, soft deletion and uniqueness the
same way the PostgreSQL repositories do.
"""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock

import pytest

from clients.domain.aggregates import (
    Client,
    ClientGroup,
    ClientGroupMembership,
    UserClientAssociation,
)
from clients.domain.value_objects import ClientGroupId, ClientId, Pagination
from clients.ports.exceptions import (
    DuplicateClientGroupNameError,
    DuplicateClientIdentifierError,
    DuplicateUserClientAssociationError,
)
from infrastructure.messaging import InMemoryEventPublisher


class InMemoryClientRepository:
    def __init__(self) -> None:
        self.rows: dict[str, Client] = {}

    def _live(self, tenant_id: str) -> list[Client]:
        return [
            c
            for c in self.rows.values()
            if c.tenant_id == tenant_id and not c.is_deleted
        ]

    async def create(self, client: Client) -> Client:
        for field, value in client.details.identifiers().items():
            if any(
                getattr(other.details, field) == value
                for other in self._live(client.tenant_id)
            ):
                raise DuplicateClientIdentifierError(field, value)
        self.rows[client.id.value] = replace(client, _pending_events=[])
        return replace(client, _pending_events=[])

    async def get_by_id(self, client_id, tenant_id, include_deleted=False):
        client = self.rows.get(client_id.value)
        if client is None or client.tenant_id != tenant_id:
            return None
        if client.is_deleted and not include_deleted:
            return None
        return replace(client, _pending_events=[])

    async def update(self, client: Client) -> Client | None:
        stored = await self.get_by_id(client.id, client.tenant_id)
        if stored is None:
            return None
        self.rows[client.id.value] = replace(stored, details=client.details)
        return replace(self.rows[client.id.value], _pending_events=[])

    async def delete(self, client_id, tenant_id, actor) -> bool:
        stored = await self.get_by_id(client_id, tenant_id)
        if stored is None:
            return False
        stored.is_deleted = True
        stored.deleted_by = actor
        self.rows[client_id.value] = stored
        return True

    async def list(self, tenant_id, pagination: Pagination, search_term=None):
        clients = sorted(self._live(tenant_id), key=lambda c: c.details.company_name)
        if search_term:
            clients = [c for c in clients if search_term in c.details.company_name]
        page = clients[pagination.offset : pagination.offset + pagination.limit]
        return [replace(c, _pending_events=[]) for c in page], len(clients)

    async def _exists(self, field, value, tenant_id, exclude_id) -> bool:
        return any(
            getattr(c.details, field) == value
            for c in self._live(tenant_id)
            if exclude_id is None or c.id != exclude_id
        )

    async def ice_number_exists(self, value, tenant_id, exclude_id=None):
        return await self._exists("ice_number", value, tenant_id, exclude_id)

    async def rc_number_exists(self, value, tenant_id, exclude_id=None):
        return await self._exists("rc_number", value, tenant_id, exclude_id)

    async def vat_number_exists(self, value, tenant_id, exclude_id=None):
        return await self._exists("vat_number", value, tenant_id, exclude_id)

    async def cnss_number_exists(self, value, tenant_id, exclude_id=None):
        return await self._exists("cnss_number", value, tenant_id, exclude_id)


class InMemoryClientGroupRepository:
    def __init__(self, clients: InMemoryClientRepository) -> None:
        self.rows: dict[str, ClientGroup] = {}
        self.memberships: dict[tuple[str, str], ClientGroupMembership] = {}
        self._clients = clients

    def _live(self, tenant_id: str) -> list[ClientGroup]:
        return [
            g
            for g in self.rows.values()
            if g.tenant_id == tenant_id and not g.is_deleted
        ]

    async def create(self, group: ClientGroup) -> ClientGroup:
        if await self.name_exists(group.name, group.tenant_id):
            raise DuplicateClientGroupNameError(group.name)
        self.rows[group.id.value] = replace(group, _pending_events=[])
        return replace(group, _pending_events=[])

    async def get_by_id(self, group_id, tenant_id, include_deleted=False):
        group = self.rows.get(group_id.value)
        if group is None or group.tenant_id != tenant_id:
            return None
        if group.is_deleted and not include_deleted:
            return None
        return replace(group, _pending_events=[])

    async def update(self, group: ClientGroup) -> ClientGroup | None:
        stored = await self.get_by_id(group.id, group.tenant_id)
        if stored is None:
            return None
        self.rows[group.id.value] = replace(
            stored, name=group.name, description=group.description
        )
        return replace(self.rows[group.id.value], _pending_events=[])

    async def delete(self, group_id, tenant_id, actor) -> bool:
        stored = await self.get_by_id(group_id, tenant_id)
        if stored is None:
            return False
        stored.is_deleted = True
        stored.deleted_by = actor
        self.rows[group_id.value] = stored
        return True

    async def list(self, tenant_id, pagination: Pagination, search_term=None):
        groups = sorted(self._live(tenant_id), key=lambda g: g.name)
        page = groups[pagination.offset : pagination.offset + pagination.limit]
        return page, len(groups)

    async def count(self, tenant_id: str) -> int:
        return len(self._live(tenant_id))

    async def name_exists(self, name, tenant_id, exclude_id=None) -> bool:
        return any(
            g.name == name
            for g in self._live(tenant_id)
            if exclude_id is None or g.id != exclude_id
        )

    async def add_membership(self, membership: ClientGroupMembership) -> bool:
        key = (membership.group_id.value, membership.client_id.value)
        if key in self.memberships:
            return False
        self.memberships[key] = membership
        return True

    async def remove_membership(self, group_id, client_id) -> bool:
        return self.memberships.pop((group_id.value, client_id.value), None) is not None

    async def is_member(self, group_id, client_id) -> bool:
        return (group_id.value, client_id.value) in self.memberships

    async def list_group_clients(self, group_id, tenant_id) -> list[Client]:
        clients = []
        for gid, cid in self.memberships:
            if gid != group_id.value:
                continue
            client = await self._clients.get_by_id(ClientId(value=cid), tenant_id)
            if client is not None:
                clients.append(client)
        return sorted(clients, key=lambda c: c.details.company_name)

    async def list_client_groups(self, client_id, tenant_id) -> list[ClientGroup]:
        groups = []
        for gid, cid in self.memberships:
            if cid != client_id.value:
                continue
            group = await self.get_by_id(ClientGroupId(value=gid), tenant_id)
            if group is not None:
                groups.append(group)
        return sorted(groups, key=lambda g: g.name)


class InMemoryAssociationRepository:
    def __init__(self) -> None:
        self.rows: dict[tuple[str, str, str], UserClientAssociation] = {}

    async def create(self, association: UserClientAssociation):
        key = (association.tenant_id, association.user_id, association.client_id.value)
        if key in self.rows:
            raise DuplicateUserClientAssociationError(
                association.user_id, association.client_id.value
            )
        self.rows[key] = replace(association, _pending_events=[])
        return replace(association, _pending_events=[])

    async def get(self, user_id, client_id, tenant_id):
        return self.rows.get((tenant_id, user_id, client_id.value))

    async def delete(self, user_id, client_id, tenant_id) -> bool:
        return self.rows.pop((tenant_id, user_id, client_id.value), None) is not None

    def _matching(self, tenant_id, user_id=None, client_id=None):
        return sorted(
            (
                a
                for (t, u, c), a in self.rows.items()
                if t == tenant_id
                and (user_id is None or u == user_id)
                and (client_id is None or c == client_id.value)
            ),
            key=lambda a: a.assigned_at,
        )

    async def list_by_client(self, client_id, tenant_id, pagination):
        items = self._matching(tenant_id, client_id=client_id)
        return items[pagination.offset : pagination.offset + pagination.limit]

    async def count_by_client(self, client_id, tenant_id) -> int:
        return len(self._matching(tenant_id, client_id=client_id))

    async def list_by_user(self, user_id, tenant_id, pagination):
        items = self._matching(tenant_id, user_id=user_id)
        return items[pagination.offset : pagination.offset + pagination.limit]

    async def count_by_user(self, user_id, tenant_id) -> int:
        return len(self._matching(tenant_id, user_id=user_id))


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    return session


@pytest.fixture
def publisher() -> InMemoryEventPublisher:
    return InMemoryEventPublisher()


@pytest.fixture
def client_store() -> InMemoryClientRepository:
    return InMemoryClientRepository()


@pytest.fixture
def group_store(client_store) -> InMemoryClientGroupRepository:
    return InMemoryClientGroupRepository(client_store)


@pytest.fixture
def association_store() -> InMemoryAssociationRepository:
    return InMemoryAssociationRepository()
