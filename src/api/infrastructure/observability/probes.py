"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database engine and pool lifecycle."""

    def pool_initialized(
        self, name: str, host: str, database: str, max_conn: int
    ) -> None:
        """Record that an engine and its pool were created."""
        ...

    def pool_closed(self, name: str) -> None:
        """Record that an engine was disposed."""
        ...

    def tenant_connection_opened(self, host: str, database: str) -> None:
        """Record that a tenant database engine was created."""
        ...

    def tenant_connection_failed(
        self, host: str, database: str, error: Exception
    ) -> None:
        """Record that connecting to a tenant database failed."""
        ...

    def tenant_connection_closed(self, database: str) -> None:
        """Record that a tenant database engine was disposed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def pool_initialized(
        self, name: str, host: str, database: str, max_conn: int
    ) -> None:
        self._logger.info(
            "connection_pool_initialized",
            pool=name,
            host=host,
            database=database,
            max_connections=max_conn,
            **self._get_context_kwargs(),
        )

    def pool_closed(self, name: str) -> None:
        self._logger.info(
            "connection_pool_closed",
            pool=name,
            **self._get_context_kwargs(),
        )

    def tenant_connection_opened(self, host: str, database: str) -> None:
        self._logger.debug(
            "tenant_connection_opened",
            host=host,
            database=database,
            **self._get_context_kwargs(),
        )

    def tenant_connection_failed(
        self, host: str, database: str, error: Exception
    ) -> None:
        self._logger.error(
            "tenant_connection_failed",
            host=host,
            database=database,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def tenant_connection_closed(self, database: str) -> None:
        self._logger.debug(
            "tenant_connection_closed",
            database=database,
            **self._get_context_kwargs(),
        )
