"""PostgreSQL implementation of IUserClientAssociationRepository."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clients.domain.aggregates import UserClientAssociation
from clients.domain.value_objects import AssociationId, ClientId, Pagination
from clients.infrastructure.models import UserClientAssociationModel
from clients.infrastructure.observability import (
    DefaultUserClientAssociationRepositoryProbe,
    UserClientAssociationRepositoryProbe,
)
from clients.ports.exceptions import DuplicateUserClientAssociationError
from clients.ports.repositories import IUserClientAssociationRepository


class UserClientAssociationRepository(IUserClientAssociationRepository):
    """Repository for user-client assignments.

    Listing and counting are separate queries so callers can page through
    large assignment sets while still showing a total.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: UserClientAssociationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultUserClientAssociationRepositoryProbe()

    async def create(
        self, association: UserClientAssociation
    ) -> UserClientAssociation:
        model = UserClientAssociationModel(
            id=association.id.value,
            user_id=association.user_id,
            client_id=association.client_id.value,
            tenant_id=association.tenant_id,
            assigned_at=association.assigned_at,
            assigned_by=association.assigned_by,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "uq_user_client_associations_tenant_user_client" in str(e.orig):
                self._probe.duplicate_association(
                    association.user_id, association.client_id.value
                )
                raise DuplicateUserClientAssociationError(
                    f"User {association.user_id} is already assigned to client "
                    f"{association.client_id}"
                ) from e
            raise

        self._probe.association_saved(association.id.value, association.tenant_id)
        return _to_domain(model)

    async def get(
        self, user_id: str, client_id: ClientId, tenant_id: str
    ) -> UserClientAssociation | None:
        result = await self._session.execute(
            select(UserClientAssociationModel).where(
                UserClientAssociationModel.user_id == user_id,
                UserClientAssociationModel.client_id == client_id.value,
                UserClientAssociationModel.tenant_id == tenant_id,
            )
        )
        model = result.scalar_one_or_none()
        return _to_domain(model) if model is not None else None

    async def delete(self, user_id: str, client_id: ClientId, tenant_id: str) -> bool:
        result = await self._session.execute(
            delete(UserClientAssociationModel).where(
                UserClientAssociationModel.user_id == user_id,
                UserClientAssociationModel.client_id == client_id.value,
                UserClientAssociationModel.tenant_id == tenant_id,
            )
        )
        if result.rowcount == 0:
            return False

        self._probe.association_deleted(user_id, client_id.value)
        return True

    async def list_by_client(
        self, client_id: ClientId, tenant_id: str, pagination: Pagination
    ) -> list[UserClientAssociation]:
        result = await self._session.execute(
            select(UserClientAssociationModel)
            .where(
                UserClientAssociationModel.client_id == client_id.value,
                UserClientAssociationModel.tenant_id == tenant_id,
            )
            .order_by(
                UserClientAssociationModel.assigned_at, UserClientAssociationModel.id
            )
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return [_to_domain(model) for model in result.scalars().all()]

    async def count_by_client(self, client_id: ClientId, tenant_id: str) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(UserClientAssociationModel)
            .where(
                UserClientAssociationModel.client_id == client_id.value,
                UserClientAssociationModel.tenant_id == tenant_id,
            )
        )
        return result.scalar_one()

    async def list_by_user(
        self, user_id: str, tenant_id: str, pagination: Pagination
    ) -> list[UserClientAssociation]:
        result = await self._session.execute(
            select(UserClientAssociationModel)
            .where(
                UserClientAssociationModel.user_id == user_id,
                UserClientAssociationModel.tenant_id == tenant_id,
            )
            .order_by(
                UserClientAssociationModel.assigned_at, UserClientAssociationModel.id
            )
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        return [_to_domain(model) for model in result.scalars().all()]

    async def count_by_user(self, user_id: str, tenant_id: str) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(UserClientAssociationModel)
            .where(
                UserClientAssociationModel.user_id == user_id,
                UserClientAssociationModel.tenant_id == tenant_id,
            )
        )
        return result.scalar_one()


def _to_domain(model: UserClientAssociationModel) -> UserClientAssociation:
    return UserClientAssociation(
        id=AssociationId(value=model.id),
        user_id=model.user_id,
        client_id=ClientId(value=model.client_id),
        tenant_id=model.tenant_id,
        assigned_at=model.assigned_at,
        assigned_by=model.assigned_by,
    )
