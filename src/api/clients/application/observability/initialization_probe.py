"""Protocol for tenant initialization observability."""

from __future__ import annotations

from typing import Protocol

import structlog


class InitializationProbe(Protocol):
    """Domain probe for the tenant provisioning saga step."""

    def initialization_started(
        self, tenant_id: str, database_name: str, correlation_id: str
    ) -> None: ...

    def schema_untracked(self, tenant_id: str, database_name: str) -> None:
        """Tables exist without migration history; the schema was left as is."""
        ...

    def schema_migrated(self, tenant_id: str, database_name: str) -> None: ...

    def default_groups_seeded(self, tenant_id: str, count: int) -> None: ...

    def default_groups_already_present(self, tenant_id: str) -> None: ...

    def initialization_completed(self, tenant_id: str, correlation_id: str) -> None:
        ...

    def initialization_failed(
        self, tenant_id: str, correlation_id: str, error: str
    ) -> None: ...


class DefaultInitializationProbe:
    """Default implementation of InitializationProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def initialization_started(
        self, tenant_id: str, database_name: str, correlation_id: str
    ) -> None:
        self._logger.info(
            "client_management_initialization_started",
            tenant_id=tenant_id,
            database_name=database_name,
            correlation_id=correlation_id,
        )

    def schema_untracked(self, tenant_id: str, database_name: str) -> None:
        self._logger.warning(
            "client_management_schema_untracked",
            tenant_id=tenant_id,
            database_name=database_name,
            detail="schema exists without migration history; "
            "future migrations may need manual intervention",
        )

    def schema_migrated(self, tenant_id: str, database_name: str) -> None:
        self._logger.info(
            "client_management_schema_migrated",
            tenant_id=tenant_id,
            database_name=database_name,
        )

    def default_groups_seeded(self, tenant_id: str, count: int) -> None:
        self._logger.info(
            "client_management_default_groups_seeded",
            tenant_id=tenant_id,
            count=count,
        )

    def default_groups_already_present(self, tenant_id: str) -> None:
        self._logger.info(
            "client_management_default_groups_already_present",
            tenant_id=tenant_id,
        )

    def initialization_completed(self, tenant_id: str, correlation_id: str) -> None:
        self._logger.info(
            "client_management_initialized",
            tenant_id=tenant_id,
            correlation_id=correlation_id,
        )

    def initialization_failed(
        self, tenant_id: str, correlation_id: str, error: str
    ) -> None:
        self._logger.error(
            "client_management_initialization_failed",
            tenant_id=tenant_id,
            correlation_id=correlation_id,
            error=error,
        )
