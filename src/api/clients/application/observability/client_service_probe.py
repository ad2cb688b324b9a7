"""Protocol for client application service observability.

Defines the interface for domain probes that capture application-level
domain events for client service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ClientServiceProbe(Protocol):
    """Domain probe for client application service operations."""

    def client_created(self, client_id: str, tenant_id: str, actor: str) -> None:
        """Record that a client was created."""
        ...

    def client_updated(self, client_id: str, tenant_id: str, actor: str) -> None:
        """Record that a client was updated."""
        ...

    def client_deleted(self, client_id: str, tenant_id: str, actor: str) -> None:
        """Record that a client was soft-deleted."""
        ...

    def client_not_found(self, client_id: str, tenant_id: str) -> None:
        """Record that a write targeted a missing client."""
        ...

    def duplicate_identifier_rejected(
        self, field: str, value: str, tenant_id: str
    ) -> None:
        """Record that a write was rejected for a duplicate identifier."""
        ...

    def event_publish_failed(self, event_type: str, error: str) -> None:
        """Record that a committed change could not be announced."""
        ...

    def with_context(self, context: ObservationContext) -> ClientServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultClientServiceProbe:
    """Default implementation of ClientServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultClientServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultClientServiceProbe(logger=self._logger, context=context)

    def client_created(self, client_id: str, tenant_id: str, actor: str) -> None:
        self._logger.info(
            "client_created",
            client_id=client_id,
            tenant_id=tenant_id,
            actor=actor,
            **self._get_context_kwargs(),
        )

    def client_updated(self, client_id: str, tenant_id: str, actor: str) -> None:
        self._logger.info(
            "client_updated",
            client_id=client_id,
            tenant_id=tenant_id,
            actor=actor,
            **self._get_context_kwargs(),
        )

    def client_deleted(self, client_id: str, tenant_id: str, actor: str) -> None:
        self._logger.info(
            "client_deleted",
            client_id=client_id,
            tenant_id=tenant_id,
            actor=actor,
            **self._get_context_kwargs(),
        )

    def client_not_found(self, client_id: str, tenant_id: str) -> None:
        self._logger.debug(
            "client_not_found",
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_identifier_rejected(
        self, field: str, value: str, tenant_id: str
    ) -> None:
        self._logger.info(
            "client_duplicate_identifier_rejected",
            field=field,
            value=value,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def event_publish_failed(self, event_type: str, error: str) -> None:
        self._logger.error(
            "client_event_publish_failed",
            event_type=event_type,
            error=error,
            **self._get_context_kwargs(),
        )
