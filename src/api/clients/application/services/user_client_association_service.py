"""User-client association application service.

Assigns identity-service users to clients. Users are not stored here; the
identity service is asked whether a user exists before assigning it.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from clients.application.observability import (
    DefaultUserClientAssociationServiceProbe,
    UserClientAssociationServiceProbe,
)
from clients.application.services.publishing import publish_committed
from clients.domain.aggregates import UserClientAssociation
from clients.domain.value_objects import ClientId, Page, Pagination, resolve_actor
from clients.ports.exceptions import DuplicateUserClientAssociationError
from clients.ports.identity import IIdentityService
from clients.ports.repositories import (
    IClientRepository,
    IUserClientAssociationRepository,
)
from shared_kernel.messaging import IEventPublisher


class UserClientAssociationService:
    """Application service for user-client assignments."""

    def __init__(
        self,
        session: AsyncSession,
        association_repository: IUserClientAssociationRepository,
        client_repository: IClientRepository,
        identity_service: IIdentityService,
        publisher: IEventPublisher,
        actor: str | None = None,
        probe: UserClientAssociationServiceProbe | None = None,
    ):
        self._session = session
        self._association_repository = association_repository
        self._client_repository = client_repository
        self._identity_service = identity_service
        self._publisher = publisher
        self._actor = actor
        self._probe = probe or DefaultUserClientAssociationServiceProbe()

    async def assign_user_to_client(
        self,
        client_id: ClientId,
        user_id: str,
        tenant_id: str,
        actor: str | None = None,
    ) -> UserClientAssociation | None:
        """Assign a user to a client.

        Assignment is idempotent: an existing association is returned
        unchanged and nothing is published.

        Returns:
            The association, or None if the client does not exist in the
            tenant or the identity service does not know the user

        Raises:
            ValueError: If the user id is blank
        """
        actor = resolve_actor(actor, self._actor)
        try:
            async with self._session.begin():
                client = await self._client_repository.get_by_id(client_id, tenant_id)
                if client is None:
                    self._probe.assignment_rejected(
                        user_id, client_id.value, tenant_id, "client_not_found"
                    )
                    return None

                if not await self._identity_service.user_exists(user_id, tenant_id):
                    self._probe.assignment_rejected(
                        user_id, client_id.value, tenant_id, "user_not_found"
                    )
                    return None

                existing = await self._association_repository.get(
                    user_id, client_id, tenant_id
                )
                if existing is not None:
                    self._probe.user_already_assigned(
                        user_id, client_id.value, tenant_id
                    )
                    return existing

                association = UserClientAssociation.create(
                    user_id=user_id,
                    client_id=client_id,
                    tenant_id=tenant_id,
                    assigned_by=actor,
                )
                created = await self._association_repository.create(association)
        except DuplicateUserClientAssociationError:
            # A concurrent assignment committed first
            self._probe.user_already_assigned(user_id, client_id.value, tenant_id)
            return await self._association_repository.get(
                user_id, client_id, tenant_id
            )

        self._probe.user_assigned(user_id, client_id.value, tenant_id)
        await publish_committed(
            self._publisher, association.collect_events(), self._probe
        )
        return created

    async def remove_user_from_client(
        self,
        client_id: ClientId,
        user_id: str,
        tenant_id: str,
        actor: str | None = None,
    ) -> bool:
        """Delete a user's assignment to a client.

        Returns:
            True if an association was removed, False if there was none
        """
        actor = resolve_actor(actor, self._actor)
        async with self._session.begin():
            association = await self._association_repository.get(
                user_id, client_id, tenant_id
            )
            if association is None:
                return False

            association.mark_for_removal(actor)
            if not await self._association_repository.delete(
                user_id, client_id, tenant_id
            ):
                return False

        self._probe.user_unassigned(user_id, client_id.value, tenant_id)
        await publish_committed(
            self._publisher, association.collect_events(), self._probe
        )
        return True

    async def get_client_users(
        self,
        client_id: ClientId,
        tenant_id: str,
        page: int | None = None,
        page_size: int | None = None,
    ) -> Page[UserClientAssociation]:
        """Users assigned to a client, oldest assignment first."""
        pagination = Pagination.of(page, page_size)
        items = await self._association_repository.list_by_client(
            client_id, tenant_id, pagination
        )
        total_count = await self._association_repository.count_by_client(
            client_id, tenant_id
        )
        return Page(items=items, total_count=total_count, pagination=pagination)

    async def get_user_clients(
        self,
        user_id: str,
        tenant_id: str,
        page: int | None = None,
        page_size: int | None = None,
    ) -> Page[UserClientAssociation]:
        """Clients a user is assigned to, oldest assignment first."""
        pagination = Pagination.of(page, page_size)
        items = await self._association_repository.list_by_user(
            user_id, tenant_id, pagination
        )
        total_count = await self._association_repository.count_by_user(
            user_id, tenant_id
        )
        return Page(items=items, total_count=total_count, pagination=pagination)
