"""PostgreSQL implementation of IClientGroupRepository.

Groups are soft-deleted like clients. Membership rows are plain join rows:
adding is idempotent (ON CONFLICT DO NOTHING) and removing deletes the row.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, delete, exists, false, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clients.domain.aggregates import Client, ClientGroup, ClientGroupMembership
from clients.domain.value_objects import ClientGroupId, ClientId, Pagination
from clients.infrastructure.client_repository import client_to_domain
from clients.infrastructure.models import (
    ClientGroupMembershipModel,
    ClientGroupModel,
    ClientModel,
)
from clients.infrastructure.observability import (
    ClientGroupRepositoryProbe,
    DefaultClientGroupRepositoryProbe,
)
from clients.ports.exceptions import DuplicateClientGroupNameError
from clients.ports.repositories import IClientGroupRepository
from infrastructure.database.models import utc_now


class ClientGroupRepository(IClientGroupRepository):
    """Repository persisting ClientGroup aggregates and memberships."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ClientGroupRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultClientGroupRepositoryProbe()

    async def create(self, group: ClientGroup) -> ClientGroup:
        model = ClientGroupModel(
            id=group.id.value,
            tenant_id=group.tenant_id,
            name=group.name,
            description=group.description,
            is_deleted=False,
        )
        self._session.add(model)
        await self._flush(group)

        self._probe.group_saved(group.id.value, group.tenant_id)
        return group_to_domain(model)

    async def get_by_id(
        self,
        group_id: ClientGroupId,
        tenant_id: str,
        include_deleted: bool = False,
    ) -> ClientGroup | None:
        stmt = select(ClientGroupModel).where(
            ClientGroupModel.id == group_id.value,
            ClientGroupModel.tenant_id == tenant_id,
        )
        if not include_deleted:
            stmt = stmt.where(ClientGroupModel.is_deleted == false())

        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.group_not_found(group_id.value, tenant_id)
            return None
        return group_to_domain(model)

    async def update(self, group: ClientGroup) -> ClientGroup | None:
        stmt = select(ClientGroupModel).where(
            ClientGroupModel.id == group.id.value,
            ClientGroupModel.tenant_id == group.tenant_id,
            ClientGroupModel.is_deleted == false(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.group_not_found(group.id.value, group.tenant_id)
            return None

        model.name = group.name
        model.description = group.description
        model.updated_at = utc_now()
        await self._flush(group)

        self._probe.group_saved(group.id.value, group.tenant_id)
        return group_to_domain(model)

    async def delete(
        self, group_id: ClientGroupId, tenant_id: str, actor: str
    ) -> bool:
        now = utc_now()
        stmt = (
            update(ClientGroupModel)
            .where(
                ClientGroupModel.id == group_id.value,
                ClientGroupModel.tenant_id == tenant_id,
                ClientGroupModel.is_deleted == false(),
            )
            .values(is_deleted=True, deleted_at=now, deleted_by=actor, updated_at=now)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            self._probe.group_not_found(group_id.value, tenant_id)
            return False

        self._probe.group_soft_deleted(group_id.value, tenant_id, actor)
        return True

    async def list(
        self,
        tenant_id: str,
        pagination: Pagination,
        search_term: str | None = None,
    ) -> tuple[list[ClientGroup], int]:
        conditions: list[ColumnElement[bool]] = [
            ClientGroupModel.tenant_id == tenant_id,
            ClientGroupModel.is_deleted == false(),
        ]
        if search_term and search_term.strip():
            term = search_term.strip()
            conditions.append(
                or_(
                    ClientGroupModel.name.contains(term, autoescape=True),
                    ClientGroupModel.description.contains(term, autoescape=True),
                )
            )

        count_result = await self._session.execute(
            select(func.count()).select_from(ClientGroupModel).where(*conditions)
        )
        total = count_result.scalar_one()

        page_result = await self._session.execute(
            select(ClientGroupModel)
            .where(*conditions)
            .order_by(ClientGroupModel.name, ClientGroupModel.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        groups = [group_to_domain(model) for model in page_result.scalars().all()]
        return groups, total

    async def count(self, tenant_id: str) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(ClientGroupModel)
            .where(
                ClientGroupModel.tenant_id == tenant_id,
                ClientGroupModel.is_deleted == false(),
            )
        )
        return result.scalar_one()

    async def name_exists(
        self,
        name: str,
        tenant_id: str,
        exclude_id: ClientGroupId | None = None,
    ) -> bool:
        condition = exists().where(
            ClientGroupModel.name == name,
            ClientGroupModel.tenant_id == tenant_id,
            ClientGroupModel.is_deleted == false(),
        )
        if exclude_id is not None:
            condition = condition.where(ClientGroupModel.id != exclude_id.value)

        result = await self._session.execute(select(condition))
        return bool(result.scalar())

    async def add_membership(self, membership: ClientGroupMembership) -> bool:
        stmt = (
            insert(ClientGroupMembershipModel)
            .values(
                client_id=membership.client_id.value,
                group_id=membership.group_id.value,
                joined_at=membership.joined_at,
                added_by=membership.added_by,
            )
            .on_conflict_do_nothing(index_elements=["client_id", "group_id"])
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            self._probe.membership_already_present(
                membership.group_id.value, membership.client_id.value
            )
            return False

        self._probe.membership_added(
            membership.group_id.value, membership.client_id.value
        )
        return True

    async def remove_membership(
        self, group_id: ClientGroupId, client_id: ClientId
    ) -> bool:
        result = await self._session.execute(
            delete(ClientGroupMembershipModel).where(
                ClientGroupMembershipModel.group_id == group_id.value,
                ClientGroupMembershipModel.client_id == client_id.value,
            )
        )
        if result.rowcount == 0:
            return False

        self._probe.membership_removed(group_id.value, client_id.value)
        return True

    async def is_member(self, group_id: ClientGroupId, client_id: ClientId) -> bool:
        result = await self._session.execute(
            select(
                exists().where(
                    ClientGroupMembershipModel.group_id == group_id.value,
                    ClientGroupMembershipModel.client_id == client_id.value,
                )
            )
        )
        return bool(result.scalar())

    async def list_group_clients(
        self, group_id: ClientGroupId, tenant_id: str
    ) -> list[Client]:
        stmt = (
            select(ClientModel)
            .join(
                ClientGroupMembershipModel,
                ClientGroupMembershipModel.client_id == ClientModel.id,
            )
            .join(
                ClientGroupModel,
                ClientGroupModel.id == ClientGroupMembershipModel.group_id,
            )
            .where(
                ClientGroupModel.id == group_id.value,
                ClientGroupModel.tenant_id == tenant_id,
                ClientGroupModel.is_deleted == false(),
                ClientModel.tenant_id == tenant_id,
                ClientModel.is_deleted == false(),
            )
            .order_by(ClientModel.company_name, ClientModel.id)
        )
        result = await self._session.execute(stmt)
        return [client_to_domain(model) for model in result.scalars().all()]

    async def list_client_groups(
        self, client_id: ClientId, tenant_id: str
    ) -> list[ClientGroup]:
        stmt = (
            select(ClientGroupModel)
            .join(
                ClientGroupMembershipModel,
                ClientGroupMembershipModel.group_id == ClientGroupModel.id,
            )
            .join(ClientModel, ClientModel.id == ClientGroupMembershipModel.client_id)
            .where(
                ClientModel.id == client_id.value,
                ClientModel.tenant_id == tenant_id,
                ClientModel.is_deleted == false(),
                ClientGroupModel.tenant_id == tenant_id,
                ClientGroupModel.is_deleted == false(),
            )
            .order_by(ClientGroupModel.name, ClientGroupModel.id)
        )
        result = await self._session.execute(stmt)
        return [group_to_domain(model) for model in result.scalars().all()]

    async def _flush(self, group: ClientGroup) -> None:
        """Flush pending changes, translating the name index violation."""
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "uq_client_groups_tenant_name" in str(e.orig):
                self._probe.duplicate_group_name(group.name, group.tenant_id)
                raise DuplicateClientGroupNameError(group.name) from e
            raise


def group_to_domain(model: ClientGroupModel) -> ClientGroup:
    return ClientGroup(
        id=ClientGroupId(value=model.id),
        tenant_id=model.tenant_id,
        name=model.name,
        description=model.description,
        is_deleted=model.is_deleted,
        deleted_at=model.deleted_at,
        deleted_by=model.deleted_by,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
