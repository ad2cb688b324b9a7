"""Unit tests for ClientGroupRepository.

Tests verify repository behavior with a mocked AsyncSession. Membership and
join queries are checked by compiling the executed statement.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from clients.domain.aggregates import ClientGroup
from clients.domain.value_objects import ClientGroupId, ClientId, Pagination
from clients.infrastructure.client_group_repository import ClientGroupRepository
from clients.infrastructure.models import ClientGroupModel, ClientModel
from clients.ports.exceptions import DuplicateClientGroupNameError
from clients.ports.repositories import IClientGroupRepository


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
    return ClientGroupRepository(session=mock_session, probe=mock_probe)


def new_group(name: str = "Key Accounts") -> ClientGroup:
    group = ClientGroup.create("tenant-a", name, actor="alice")
    group.collect_events()
    return group


def group_model(**overrides) -> ClientGroupModel:
    values = {
        "id": ClientGroupId.generate().value,
        "tenant_id": "tenant-a",
        "name": "Key Accounts",
        "description": None,
        "is_deleted": False,
    }
    values.update(overrides)
    return ClientGroupModel(**values)


def rowcount_result(rowcount: int):
    result = MagicMock()
    result.rowcount = rowcount
    return result


def scalars_result(models):
    result = MagicMock()
    result.scalars.return_value.all.return_value = models
    return result


def executed_sql(mock_session) -> str:
    stmt = mock_session.execute.await_args.args[0]
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IClientGroupRepository)


class TestCreate:
    @pytest.mark.asyncio
    async def test_adds_model_and_flushes(self, repository, mock_session, mock_probe):
        group = new_group()

        created = await repository.create(group)

        model = mock_session.add.call_args[0][0]
        assert isinstance(model, ClientGroupModel)
        assert model.id == group.id.value
        assert model.tenant_id == "tenant-a"
        assert model.is_deleted is False
        mock_session.flush.assert_awaited_once()
        assert created.name == "Key Accounts"
        mock_probe.group_saved.assert_called_once_with(group.id.value, "tenant-a")

    @pytest.mark.asyncio
    async def test_translates_name_index_violation(
        self, repository, mock_session, mock_probe
    ):
        mock_session.flush.side_effect = IntegrityError(
            "INSERT",
            {},
            Exception('duplicate key violates "uq_client_groups_tenant_name"'),
        )

        with pytest.raises(DuplicateClientGroupNameError) as exc_info:
            await repository.create(new_group("VIP"))

        assert exc_info.value.name == "VIP"
        mock_probe.duplicate_group_name.assert_called_once_with("VIP", "tenant-a")
        mock_probe.group_saved.assert_not_called()

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, repository, mock_session):
        mock_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("not-null violation")
        )

        with pytest.raises(IntegrityError):
            await repository.create(new_group())


class TestUpdate:
    @pytest.mark.asyncio
    async def test_rename_onto_existing_name_raises(self, repository, mock_session):
        model = group_model()
        found = MagicMock()
        found.scalar_one_or_none.return_value = model
        mock_session.execute.return_value = found
        mock_session.flush.side_effect = IntegrityError(
            "UPDATE",
            {},
            Exception('duplicate key violates "uq_client_groups_tenant_name"'),
        )
        group = ClientGroup(
            id=ClientGroupId(value=model.id), tenant_id="tenant-a", name="VIP"
        )

        with pytest.raises(DuplicateClientGroupNameError):
            await repository.update(group)

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(
        self, repository, mock_session, mock_probe
    ):
        found = MagicMock()
        found.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = found
        group = new_group()

        assert await repository.update(group) is None
        mock_session.flush.assert_not_awaited()
        mock_probe.group_not_found.assert_called_once_with(
            group.id.value, "tenant-a"
        )


class TestDelete:
    @pytest.mark.asyncio
    async def test_soft_deletes(self, repository, mock_session, mock_probe):
        mock_session.execute.return_value = rowcount_result(1)
        group_id = ClientGroupId.generate()

        assert await repository.delete(group_id, "tenant-a", "carol") is True
        mock_probe.group_soft_deleted.assert_called_once_with(
            group_id.value, "tenant-a", "carol"
        )
        sql = executed_sql(mock_session)
        assert sql.startswith("UPDATE client_groups")
        mock_session.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_false_when_no_live_row(self, repository, mock_session):
        mock_session.execute.return_value = rowcount_result(0)

        assert (
            await repository.delete(ClientGroupId.generate(), "tenant-a", "c")
            is False
        )


class TestListAndCount:
    @pytest.mark.asyncio
    async def test_returns_page_and_total(self, repository, mock_session):
        count_result = MagicMock()
        count_result.scalar_one.return_value = 7
        page_result = scalars_result(
            [group_model(name="Basic"), group_model(name="Premium")]
        )
        mock_session.execute.side_effect = [count_result, page_result]

        groups, total = await repository.list("tenant-a", Pagination.of(1, 2))

        assert total == 7
        assert [g.name for g in groups] == ["Basic", "Premium"]
        assert mock_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_count_returns_scalar(self, repository, mock_session):
        count_result = MagicMock()
        count_result.scalar_one.return_value = 4
        mock_session.execute.return_value = count_result

        assert await repository.count("tenant-a") == 4
        assert "client_groups.is_deleted" in executed_sql(mock_session)


class TestAddMembership:
    @pytest.mark.asyncio
    async def test_reports_inserted_row(self, repository, mock_session, mock_probe):
        group = new_group()
        membership = group.new_membership(ClientId.generate(), "bob")
        mock_session.execute.return_value = rowcount_result(1)

        assert await repository.add_membership(membership) is True

        sql = executed_sql(mock_session)
        assert "ON CONFLICT (client_id, group_id) DO NOTHING" in sql
        mock_probe.membership_added.assert_called_once_with(
            group.id.value, membership.client_id.value
        )

    @pytest.mark.asyncio
    async def test_conflict_reports_no_insert(
        self, repository, mock_session, mock_probe
    ):
        group = new_group()
        membership = group.new_membership(ClientId.generate(), "bob")
        mock_session.execute.return_value = rowcount_result(0)

        assert await repository.add_membership(membership) is False

        mock_probe.membership_already_present.assert_called_once_with(
            group.id.value, membership.client_id.value
        )
        mock_probe.membership_added.assert_not_called()


class TestRemoveMembership:
    @pytest.mark.asyncio
    async def test_deletes_row(self, repository, mock_session, mock_probe):
        mock_session.execute.return_value = rowcount_result(1)
        group_id, client_id = ClientGroupId.generate(), ClientId.generate()

        assert await repository.remove_membership(group_id, client_id) is True
        mock_probe.membership_removed.assert_called_once_with(
            group_id.value, client_id.value
        )

    @pytest.mark.asyncio
    async def test_returns_false_when_not_a_member(
        self, repository, mock_session, mock_probe
    ):
        mock_session.execute.return_value = rowcount_result(0)

        removed = await repository.remove_membership(
            ClientGroupId.generate(), ClientId.generate()
        )

        assert removed is False
        mock_probe.membership_removed.assert_not_called()


class TestMembershipQueries:
    @pytest.mark.asyncio
    async def test_group_clients_only_join_live_rows_of_the_tenant(
        self, repository, mock_session
    ):
        client = ClientModel(
            id=ClientId.generate().value,
            tenant_id="tenant-a",
            company_name="Atlas",
            status="Active",
            is_deleted=False,
        )
        mock_session.execute.return_value = scalars_result([client])

        clients = await repository.list_group_clients(
            ClientGroupId.generate(), "tenant-a"
        )

        assert [c.details.company_name for c in clients] == ["Atlas"]
        sql = executed_sql(mock_session)
        assert "client_groups.is_deleted" in sql
        assert "clients.is_deleted" in sql
        assert "client_groups.tenant_id" in sql
        assert "clients.tenant_id" in sql

    @pytest.mark.asyncio
    async def test_client_groups_only_join_live_rows_of_the_tenant(
        self, repository, mock_session
    ):
        mock_session.execute.return_value = scalars_result([group_model()])

        groups = await repository.list_client_groups(ClientId.generate(), "tenant-a")

        assert [g.name for g in groups] == ["Key Accounts"]
        sql = executed_sql(mock_session)
        assert "client_groups.is_deleted" in sql
        assert "clients.is_deleted" in sql
        assert "client_groups.tenant_id" in sql
        assert "clients.tenant_id" in sql

    @pytest.mark.asyncio
    async def test_is_member_reports_scalar(self, repository, mock_session):
        result = MagicMock()
        result.scalar.return_value = False
        mock_session.execute.return_value = result

        assert (
            await repository.is_member(ClientGroupId.generate(), ClientId.generate())
            is False
        )
