"""Tenant provisioning step of the tenant onboarding saga.

The saga coordinator sends ``InitializeClientManagementCommand`` when a
tenant is created. Handling it brings the tenant's database schema up to
date, seeds the default client groups and announces completion with
``ClientManagementInitialized``.

Handling is idempotent: a redelivered command finds the schema current
and the groups present, and publishes the completion event again so the
coordinator always hears back.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from clients.application.observability import (
    DefaultInitializationProbe,
    InitializationProbe,
)
from clients.domain.aggregates import ClientGroup
from clients.domain.events import ClientManagementInitialized
from clients.ports.provisioning import ITenantDatabaseFactory, SchemaState
from clients.ports.repositories import IClientGroupRepository
from shared_kernel.messaging import IEventPublisher

GroupRepositoryFactory = Callable[[AsyncSession], IClientGroupRepository]


@dataclass(frozen=True)
class InitializeClientManagementCommand:
    """Request to provision Client Management for a new tenant.

    Attributes:
        correlation_id: Saga correlation id, echoed on the completion event
        tenant_id: The tenant being onboarded
        tenant_name: Display name of the tenant
        database_name: The tenant's own database
    """

    correlation_id: str
    tenant_id: str
    tenant_name: str
    database_name: str


class ClientManagementInitializer:
    """Handles InitializeClientManagementCommand."""

    def __init__(
        self,
        databases: ITenantDatabaseFactory,
        group_repository_factory: GroupRepositoryFactory,
        publisher: IEventPublisher,
        probe: InitializationProbe | None = None,
    ):
        """Initialize the handler.

        Args:
            databases: Opens tenant databases by name
            group_repository_factory: Builds a group repository on a
                tenant database session
            publisher: Message bus port for the completion event
            probe: Optional domain probe for observability
        """
        self._databases = databases
        self._group_repository_factory = group_repository_factory
        self._publisher = publisher
        self._probe = probe or DefaultInitializationProbe()

    async def handle(self, command: InitializeClientManagementCommand) -> None:
        """Provision the tenant and publish ClientManagementInitialized.

        Raises:
            Exception: Any failure is logged and re-raised so the message
                stays pending and is retried
        """
        self._probe.initialization_started(
            command.tenant_id, command.database_name, command.correlation_id
        )
        try:
            async with self._databases.open(command.database_name) as database:
                state = await database.ensure_schema()
                if state is SchemaState.UNTRACKED:
                    self._probe.schema_untracked(
                        command.tenant_id, command.database_name
                    )
                else:
                    self._probe.schema_migrated(
                        command.tenant_id, command.database_name
                    )

                async with database.session() as session:
                    await self._seed_default_groups(session, command.tenant_id)

            now = datetime.now(UTC)
            await self._publisher.publish(
                ClientManagementInitialized(
                    tenant_id=command.tenant_id,
                    schema_created=True,
                    initialized_at=now,
                    correlation_id=command.correlation_id,
                    occurred_at=now,
                )
            )
        except Exception as e:
            self._probe.initialization_failed(
                command.tenant_id, command.correlation_id, str(e)
            )
            raise

        self._probe.initialization_completed(command.tenant_id, command.correlation_id)

    async def _seed_default_groups(self, session: AsyncSession, tenant_id: str) -> None:
        repository = self._group_repository_factory(session)
        async with session.begin():
            if await repository.count(tenant_id) > 0:
                self._probe.default_groups_already_present(tenant_id)
                return

            groups = ClientGroup.defaults_for(tenant_id)
            for group in groups:
                await repository.create(group)

        self._probe.default_groups_seeded(tenant_id, len(groups))
