"""Unit tests for ClientRepository.

Tests verify repository behavior with a mocked AsyncSession.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError

from clients.domain.aggregates import Client, ClientDetails
from clients.domain.value_objects import ClientId, ClientStatus, Pagination
from clients.infrastructure.client_repository import ClientRepository
from clients.infrastructure.models import ClientModel
from clients.ports.exceptions import DuplicateClientIdentifierError
from clients.ports.repositories import IClientRepository


@pytest.fixture
def mock_session():
    """Create mock async session."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def repository(mock_session, mock_probe):
    return ClientRepository(session=mock_session, probe=mock_probe)


def new_client() -> Client:
    return Client.create(
        "tenant-a",
        ClientDetails(
            company_name="Atlas Logistics",
            ice_number="001234567000089",
            status=ClientStatus.INACTIVE,
        ),
        actor="alice",
    )


def client_model(**overrides) -> ClientModel:
    values = {
        "id": ClientId.generate().value,
        "tenant_id": "tenant-a",
        "company_name": "Atlas Logistics",
        "status": "Active",
        "is_deleted": False,
    }
    values.update(overrides)
    return ClientModel(**values)


def execute_returning(model):
    result = MagicMock()
    result.scalar_one_or_none.return_value = model
    return result


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IClientRepository)


class TestCreate:
    @pytest.mark.asyncio
    async def test_adds_model_and_flushes(self, repository, mock_session, mock_probe):
        client = new_client()

        created = await repository.create(client)

        mock_session.add.assert_called_once()
        model = mock_session.add.call_args[0][0]
        assert isinstance(model, ClientModel)
        assert model.id == client.id.value
        assert model.tenant_id == "tenant-a"
        assert model.status == "Inactive"
        assert model.ice_number == "001234567000089"
        mock_session.flush.assert_awaited_once()
        assert created.id == client.id
        assert created.status is ClientStatus.INACTIVE
        mock_probe.client_saved.assert_called_once_with(client.id.value, "tenant-a")

    @pytest.mark.asyncio
    async def test_translates_unique_index_violation(self, repository, mock_session):
        client = new_client()
        mock_session.flush.side_effect = IntegrityError(
            "INSERT",
            {},
            Exception('duplicate key violates "uq_clients_tenant_ice_number"'),
        )

        with pytest.raises(DuplicateClientIdentifierError) as exc_info:
            await repository.create(client)

        assert exc_info.value.field == "ice_number"
        assert exc_info.value.value == "001234567000089"

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, repository, mock_session):
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("not-null violation")
        )

        with pytest.raises(IntegrityError):
            await repository.create(new_client())


class TestGetById:
    @pytest.mark.asyncio
    async def test_returns_domain_client(self, repository, mock_session):
        model = client_model()
        mock_session.execute.return_value = execute_returning(model)

        client = await repository.get_by_id(ClientId(value=model.id), "tenant-a")

        assert client is not None
        assert client.id.value == model.id
        assert client.details.company_name == "Atlas Logistics"

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(
        self, repository, mock_session, mock_probe
    ):
        mock_session.execute.return_value = execute_returning(None)
        client_id = ClientId.generate()

        assert await repository.get_by_id(client_id, "tenant-a") is None
        mock_probe.client_not_found.assert_called_once_with(
            client_id.value, "tenant-a"
        )


class TestUpdate:
    @pytest.mark.asyncio
    async def test_replaces_columns(self, repository, mock_session):
        model = client_model(country="Morocco")
        mock_session.execute.return_value = execute_returning(model)
        client = Client(
            id=ClientId(value=model.id),
            tenant_id="tenant-a",
            details=ClientDetails(company_name="Atlas Group"),
        )

        updated = await repository.update(client)

        assert model.company_name == "Atlas Group"
        assert model.country is None
        assert model.updated_at is not None
        assert updated is not None
        assert updated.details.company_name == "Atlas Group"

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self, repository, mock_session):
        mock_session.execute.return_value = execute_returning(None)

        assert await repository.update(new_client()) is None
        mock_session.flush.assert_not_awaited()


class TestDelete:
    @pytest.mark.asyncio
    async def test_soft_deletes(self, repository, mock_session, mock_probe):
        result = MagicMock()
        result.rowcount = 1
        mock_session.execute.return_value = result
        client_id = ClientId.generate()

        assert await repository.delete(client_id, "tenant-a", "carol") is True
        mock_probe.client_soft_deleted.assert_called_once_with(
            client_id.value, "tenant-a", "carol"
        )
        mock_session.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_false_when_no_live_row(self, repository, mock_session):
        result = MagicMock()
        result.rowcount = 0
        mock_session.execute.return_value = result

        assert await repository.delete(ClientId.generate(), "tenant-a", "c") is False


class TestList:
    @pytest.mark.asyncio
    async def test_returns_page_and_total(self, repository, mock_session):
        count_result = MagicMock()
        count_result.scalar_one.return_value = 42
        page_result = MagicMock()
        page_result.scalars.return_value.all.return_value = [
            client_model(company_name="Atlas"),
            client_model(company_name="Beta"),
        ]
        mock_session.execute.side_effect = [count_result, page_result]

        clients, total = await repository.list(
            "tenant-a", Pagination.of(2, 2), search_term="a"
        )

        assert total == 42
        assert [c.details.company_name for c in clients] == ["Atlas", "Beta"]
        assert mock_session.execute.await_count == 2


class TestIdentifierExists:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method",
        [
            "ice_number_exists",
            "rc_number_exists",
            "vat_number_exists",
            "cnss_number_exists",
        ],
    )
    async def test_reports_scalar_result(self, repository, mock_session, method):
        result = MagicMock()
        result.scalar.return_value = True
        mock_session.execute.return_value = result

        exists = await getattr(repository, method)(
            "12345678", "tenant-a", exclude_id=ClientId.generate()
        )

        assert exists is True
        mock_session.execute.assert_awaited_once()
