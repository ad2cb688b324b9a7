"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_starting(self, environment: str, version: str) -> None:
        """Record that the application lifespan has begun."""
        ...

    def message_bus_disabled(self) -> None:
        """Record that the service runs without the Redis message bus."""
        ...

    def initialization_consumer_started(self, stream: str, group: str) -> None:
        """Record that the tenant initialization consumer is running."""
        ...

    def application_stopped(self) -> None:
        """Record that shutdown completed and resources were released."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_starting(self, environment: str, version: str) -> None:
        """Record that the application lifespan has begun."""
        self._logger.info(
            "application_starting",
            environment=environment,
            version=version,
            **self._get_context_kwargs(),
        )

    def message_bus_disabled(self) -> None:
        """Record that the service runs without the Redis message bus."""
        self._logger.warning(
            "message_bus_disabled",
            **self._get_context_kwargs(),
        )

    def initialization_consumer_started(self, stream: str, group: str) -> None:
        """Record that the tenant initialization consumer is running."""
        self._logger.info(
            "initialization_consumer_started",
            stream=stream,
            group=group,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that shutdown completed and resources were released."""
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
