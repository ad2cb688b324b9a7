"""PostgreSQL implementation of IClientRepository.

Every query filters on tenant_id, and default reads exclude soft-deleted
rows. Clients are only ever soft-deleted; this repository issues no
DELETE against the clients table.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, exists, false, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clients.domain.aggregates import Client, ClientDetails
from clients.domain.value_objects import ClientId, ClientStatus, Pagination
from clients.infrastructure.models import ClientModel
from clients.infrastructure.observability import (
    ClientRepositoryProbe,
    DefaultClientRepositoryProbe,
)
from clients.ports.exceptions import DuplicateClientIdentifierError
from clients.ports.repositories import IClientRepository
from infrastructure.database.models import utc_now

_IDENTIFIER_FIELDS = ("ice_number", "rc_number", "vat_number", "cnss_number")


class ClientRepository(IClientRepository):
    """Repository persisting Client aggregates to the clients table."""

    def __init__(
        self,
        session: AsyncSession,
        probe: ClientRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultClientRepositoryProbe()

    async def create(self, client: Client) -> Client:
        model = ClientModel(
            id=client.id.value,
            tenant_id=client.tenant_id,
            is_deleted=False,
            **_detail_columns(client.details),
        )
        self._session.add(model)
        await self._flush(client)

        self._probe.client_saved(client.id.value, client.tenant_id)
        return client_to_domain(model)

    async def get_by_id(
        self,
        client_id: ClientId,
        tenant_id: str,
        include_deleted: bool = False,
    ) -> Client | None:
        stmt = select(ClientModel).where(
            ClientModel.id == client_id.value,
            ClientModel.tenant_id == tenant_id,
        )
        if not include_deleted:
            stmt = stmt.where(ClientModel.is_deleted == false())

        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.client_not_found(client_id.value, tenant_id)
            return None
        return client_to_domain(model)

    async def update(self, client: Client) -> Client | None:
        stmt = select(ClientModel).where(
            ClientModel.id == client.id.value,
            ClientModel.tenant_id == client.tenant_id,
            ClientModel.is_deleted == false(),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.client_not_found(client.id.value, client.tenant_id)
            return None

        for column, value in _detail_columns(client.details).items():
            setattr(model, column, value)
        # Bumped even when no column changed
        model.updated_at = utc_now()
        await self._flush(client)

        self._probe.client_saved(client.id.value, client.tenant_id)
        return client_to_domain(model)

    async def delete(self, client_id: ClientId, tenant_id: str, actor: str) -> bool:
        now = utc_now()
        stmt = (
            update(ClientModel)
            .where(
                ClientModel.id == client_id.value,
                ClientModel.tenant_id == tenant_id,
                ClientModel.is_deleted == false(),
            )
            .values(is_deleted=True, deleted_at=now, deleted_by=actor, updated_at=now)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            self._probe.client_not_found(client_id.value, tenant_id)
            return False

        self._probe.client_soft_deleted(client_id.value, tenant_id, actor)
        return True

    async def list(
        self,
        tenant_id: str,
        pagination: Pagination,
        search_term: str | None = None,
    ) -> tuple[list[Client], int]:
        conditions: list[ColumnElement[bool]] = [
            ClientModel.tenant_id == tenant_id,
            ClientModel.is_deleted == false(),
        ]
        if search_term and search_term.strip():
            term = search_term.strip()
            conditions.append(
                or_(
                    ClientModel.company_name.contains(term, autoescape=True),
                    ClientModel.ice_number.contains(term, autoescape=True),
                    ClientModel.rc_number.contains(term, autoescape=True),
                    ClientModel.vat_number.contains(term, autoescape=True),
                    ClientModel.industry.contains(term, autoescape=True),
                )
            )

        count_result = await self._session.execute(
            select(func.count()).select_from(ClientModel).where(*conditions)
        )
        total = count_result.scalar_one()

        page_result = await self._session.execute(
            select(ClientModel)
            .where(*conditions)
            .order_by(ClientModel.company_name, ClientModel.id)
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        clients = [client_to_domain(model) for model in page_result.scalars().all()]

        self._probe.clients_listed(tenant_id, len(clients), total)
        return clients, total

    async def ice_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool:
        return await self._identifier_exists(
            ClientModel.ice_number, value, tenant_id, exclude_id
        )

    async def rc_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool:
        return await self._identifier_exists(
            ClientModel.rc_number, value, tenant_id, exclude_id
        )

    async def vat_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool:
        return await self._identifier_exists(
            ClientModel.vat_number, value, tenant_id, exclude_id
        )

    async def cnss_number_exists(
        self, value: str, tenant_id: str, exclude_id: ClientId | None = None
    ) -> bool:
        return await self._identifier_exists(
            ClientModel.cnss_number, value, tenant_id, exclude_id
        )

    async def _identifier_exists(
        self,
        column,
        value: str,
        tenant_id: str,
        exclude_id: ClientId | None,
    ) -> bool:
        condition = exists().where(
            column == value,
            ClientModel.tenant_id == tenant_id,
            ClientModel.is_deleted == false(),
        )
        if exclude_id is not None:
            condition = condition.where(ClientModel.id != exclude_id.value)

        result = await self._session.execute(select(condition))
        return bool(result.scalar())

    async def _flush(self, client: Client) -> None:
        """Flush pending changes, translating identifier index violations."""
        try:
            await self._session.flush()
        except IntegrityError as e:
            message = str(e.orig)
            for field in _IDENTIFIER_FIELDS:
                if f"uq_clients_tenant_{field}" in message:
                    value = getattr(client.details, field) or ""
                    self._probe.duplicate_identifier(field, value, client.tenant_id)
                    raise DuplicateClientIdentifierError(field, value) from e
            raise


def _detail_columns(details: ClientDetails) -> dict[str, object]:
    return {
        "company_name": details.company_name,
        "country": details.country,
        "address": details.address,
        "ice_number": details.ice_number,
        "rc_number": details.rc_number,
        "vat_number": details.vat_number,
        "cnss_number": details.cnss_number,
        "industry": details.industry,
        "admin_contact_person": details.admin_contact_person,
        "billing_contact_person": details.billing_contact_person,
        "status": details.status.value,
        "fiscal_year_end": details.fiscal_year_end,
        "assigned_team_id": details.assigned_team_id,
    }


def client_to_domain(model: ClientModel) -> Client:
    return Client(
        id=ClientId(value=model.id),
        tenant_id=model.tenant_id,
        details=ClientDetails(
            company_name=model.company_name,
            country=model.country,
            address=model.address,
            ice_number=model.ice_number,
            rc_number=model.rc_number,
            vat_number=model.vat_number,
            cnss_number=model.cnss_number,
            industry=model.industry,
            admin_contact_person=model.admin_contact_person,
            billing_contact_person=model.billing_contact_person,
            status=ClientStatus(model.status),
            fiscal_year_end=model.fiscal_year_end,
            assigned_team_id=model.assigned_team_id,
        ),
        is_deleted=model.is_deleted,
        deleted_at=model.deleted_at,
        deleted_by=model.deleted_by,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
