"""Repository protocols (ports) for the Client Management bounded context.

Every read and write is scoped by tenant. Reads and soft deletes signal
"not found" with None/False sentinels rather than exceptions; connectivity
failures propagate unchanged.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from clients.domain.aggregates import (
    Client,
    ClientGroup,
    ClientGroupMembership,
    UserClientAssociation,
)
from clients.domain.value_objects import ClientGroupId, ClientId, Pagination


@runtime_checkable
class IClientRepository(Protocol):
    """Repository for Client aggregate persistence.

    Clients are never hard-deleted: ``delete`` is the single place that
    removes a client from default reads.
    """

    async def create(self, client: Client) -> Client:
        """Persist a new client.

        Returns:
            The persisted client with timestamps populated

        Raises:
            DuplicateClientIdentifierError: If a unique index rejects the row
        """
        ...

    async def get_by_id(
        self,
        client_id: ClientId,
        tenant_id: str,
        include_deleted: bool = False,
    ) -> Client | None:
        """Retrieve a client within a tenant.

        Args:
            client_id: The client to load
            tenant_id: The tenant the caller acts in
            include_deleted: Audit path that also returns soft-deleted clients

        Returns:
            The client, or None for another tenant's id or a deleted client
        """
        ...

    async def update(self, client: Client) -> Client | None:
        """Replace all editable fields of a live client.

        Returns:
            The updated client, or None if no live row matches id and tenant

        Raises:
            DuplicateClientIdentifierError: If a unique index rejects the row
        """
        ...

    async def delete(self, client_id: ClientId, tenant_id: str, actor: str) -> bool:
        """Soft-delete a live client.

        Returns:
            True if a row was marked deleted, False if none matched
        """
        ...

    async def list(
        self,
        tenant_id: str,
        pagination: Pagination,
        search_term: str | None = None,
    ) -> tuple[list[Client], int]:
        """List live clients ordered by company name.

        The search term matches company name, ICE, RC, VAT and industry.

        Returns:
            The requested page and the total number of matching clients
        """
        ...

    async def ice_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool: ...

    async def rc_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool: ...

    async def vat_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool: ...

    async def cnss_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool: ...


@runtime_checkable
class IClientGroupRepository(Protocol):
    """Repository for ClientGroup aggregates and their memberships."""

    async def create(self, group: ClientGroup) -> ClientGroup:
        """Persist a new group.

        Raises:
            DuplicateClientGroupNameError: If the name is taken in the tenant
        """
        ...

    async def get_by_id(
        self,
        group_id: ClientGroupId,
        tenant_id: str,
        include_deleted: bool = False,
    ) -> ClientGroup | None: ...

    async def update(self, group: ClientGroup) -> ClientGroup | None:
        """Replace name and description of a live group.

        Raises:
            DuplicateClientGroupNameError: If the name is taken in the tenant
        """
        ...

    async def delete(
        self, group_id: ClientGroupId, tenant_id: str, actor: str
    ) -> bool: ...

    async def list(
        self,
        tenant_id: str,
        pagination: Pagination,
        search_term: str | None = None,
    ) -> tuple[list[ClientGroup], int]:
        """List live groups ordered by name; search matches name and description."""
        ...

    async def count(self, tenant_id: str) -> int:
        """Number of live groups in the tenant."""
        ...

    async def name_exists(
        self,
        name: str,
        tenant_id: str,
        exclude_id: ClientGroupId | None = None,
    ) -> bool: ...

    async def add_membership(self, membership: ClientGroupMembership) -> bool:
        """Insert a membership row.

        Returns:
            True if a row was inserted, False if the membership already
            existed
        """
        ...

    async def remove_membership(
        self, group_id: ClientGroupId, client_id: ClientId
    ) -> bool:
        """Delete a membership row; False if there was none."""
        ...

    async def is_member(self, group_id: ClientGroupId, client_id: ClientId) -> bool:
        ...

    async def list_group_clients(
        self, group_id: ClientGroupId, tenant_id: str
    ) -> list[Client]:
        """Live clients of a group, ordered by company name."""
        ...

    async def list_client_groups(
        self, client_id: ClientId, tenant_id: str
    ) -> list[ClientGroup]:
        """Live groups a client belongs to, ordered by name."""
        ...


@runtime_checkable
class IUserClientAssociationRepository(Protocol):
    """Repository for user-client assignments. Removal is a hard delete."""

    async def create(
        self, association: UserClientAssociation
    ) -> UserClientAssociation:
        """Persist a new association.

        Raises:
            DuplicateUserClientAssociationError: If the pair is already assigned
        """
        ...

    async def get(
        self, user_id: str, client_id: ClientId, tenant_id: str
    ) -> UserClientAssociation | None: ...

    async def delete(self, user_id: str, client_id: ClientId, tenant_id: str) -> bool:
        ...

    async def list_by_client(
        self, client_id: ClientId, tenant_id: str, pagination: Pagination
    ) -> list[UserClientAssociation]:
        """Associations of a client, oldest assignment first."""
        ...

    async def count_by_client(self, client_id: ClientId, tenant_id: str) -> int: ...

    async def list_by_user(
        self, user_id: str, tenant_id: str, pagination: Pagination
    ) -> list[UserClientAssociation]:
        """Associations of a user, oldest assignment first."""
        ...

    async def count_by_user(self, user_id: str, tenant_id: str) -> int: ...
