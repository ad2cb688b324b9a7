"""Unit tests for ClientManagementInitializer."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from clients.application.initialization import (
    ClientManagementInitializer,
    InitializeClientManagementCommand,
)
from clients.application.observability import InitializationProbe
from clients.domain.events import ClientManagementInitialized
from clients.ports.provisioning import SchemaState
from infrastructure.database.exceptions import SchemaProvisioningError


class FakeTenantDatabases:
    """Opens a single fake tenant database and records each open and close."""

    def __init__(self, session, schema_state=SchemaState.MIGRATED):
        self.database = MagicMock()
        self.database.ensure_schema = AsyncMock(return_value=schema_state)
        self.opened: list[str] = []
        self.closed: list[str] = []

        @asynccontextmanager
        async def open_session():
            yield session

        self.database.session = open_session

    @asynccontextmanager
    async def open(self, database_name: str):
        self.opened.append(database_name)
        try:
            yield self.database
        finally:
            self.closed.append(database_name)


@pytest.fixture
def command() -> InitializeClientManagementCommand:
    return InitializeClientManagementCommand(
        correlation_id="saga-1",
        tenant_id="tenant-a",
        tenant_name="Acme",
        database_name="tenant_a_db",
    )


@pytest.fixture
def mock_probe():
    return create_autospec(InitializationProbe, instance=True)


@pytest.fixture
def databases(mock_session) -> FakeTenantDatabases:
    return FakeTenantDatabases(mock_session)


@pytest.fixture
def initializer(databases, group_store, publisher, mock_probe):
    return ClientManagementInitializer(
        databases=databases,
        group_repository_factory=lambda session: group_store,
        publisher=publisher,
        probe=mock_probe,
    )


class TestHandle:
    @pytest.mark.asyncio
    async def test_provisions_tenant_database(
        self, initializer, command, databases, group_store, publisher
    ):
        await initializer.handle(command)

        assert databases.opened == ["tenant_a_db"]
        assert databases.closed == ["tenant_a_db"]
        databases.database.ensure_schema.assert_awaited_once()
        assert sorted(g.name for g in group_store.rows.values()) == [
            "Basic",
            "Premium",
            "Standard",
            "VIP",
        ]
        assert all(g.tenant_id == "tenant-a" for g in group_store.rows.values())

        [event] = publisher.published
        assert isinstance(event, ClientManagementInitialized)
        assert event.tenant_id == "tenant-a"
        assert event.correlation_id == "saga-1"
        assert event.schema_created is True

    @pytest.mark.asyncio
    async def test_is_idempotent(
        self, initializer, command, group_store, publisher, mock_probe
    ):
        await initializer.handle(command)
        await initializer.handle(command)

        assert len(group_store.rows) == 4
        assert len(publisher.of_type(ClientManagementInitialized)) == 2
        mock_probe.default_groups_already_present.assert_called_once_with("tenant-a")

    @pytest.mark.asyncio
    async def test_existing_groups_are_left_alone(
        self, initializer, command, group_store, mock_probe
    ):
        from clients.domain.aggregates import ClientGroup

        await group_store.create(ClientGroup.create("tenant-a", "Custom", "alice"))

        await initializer.handle(command)

        assert [g.name for g in group_store.rows.values()] == ["Custom"]
        mock_probe.default_groups_seeded.assert_not_called()

    @pytest.mark.asyncio
    async def test_untracked_schema_is_reported(
        self, mock_session, group_store, publisher, mock_probe, command
    ):
        databases = FakeTenantDatabases(mock_session, SchemaState.UNTRACKED)
        initializer = ClientManagementInitializer(
            databases, lambda session: group_store, publisher, mock_probe
        )

        await initializer.handle(command)

        mock_probe.schema_untracked.assert_called_once_with("tenant-a", "tenant_a_db")
        mock_probe.schema_migrated.assert_not_called()
        assert len(publisher.published) == 1

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_reraised(
        self, initializer, command, databases, publisher, mock_probe
    ):
        databases.database.ensure_schema.side_effect = SchemaProvisioningError(
            "migration failed", database="tenant_a_db"
        )

        with pytest.raises(SchemaProvisioningError):
            await initializer.handle(command)

        assert databases.closed == ["tenant_a_db"]
        assert not publisher.published
        mock_probe.initialization_failed.assert_called_once_with(
            "tenant-a", "saga-1", "migration failed"
        )
        mock_probe.initialization_completed.assert_not_called()
