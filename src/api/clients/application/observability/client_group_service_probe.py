"""Protocol for client group application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ClientGroupServiceProbe(Protocol):
    """Domain probe for client group application service operations."""

    def group_created(self, group_id: str, name: str, tenant_id: str) -> None: ...

    def group_updated(self, group_id: str, name: str, tenant_id: str) -> None: ...

    def group_deleted(self, group_id: str, tenant_id: str) -> None: ...

    def duplicate_group_name_rejected(self, name: str, tenant_id: str) -> None: ...

    def client_added_to_group(
        self, group_id: str, client_id: str, tenant_id: str
    ) -> None: ...

    def client_removed_from_group(
        self, group_id: str, client_id: str, tenant_id: str
    ) -> None: ...

    def membership_target_not_found(
        self, group_id: str, client_id: str, tenant_id: str
    ) -> None:
        """Record that a membership change named a missing group or client."""
        ...

    def event_publish_failed(self, event_type: str, error: str) -> None: ...

    def with_context(self, context: ObservationContext) -> ClientGroupServiceProbe:
        ...


class DefaultClientGroupServiceProbe:
    """Default implementation of ClientGroupServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultClientGroupServiceProbe:
        return DefaultClientGroupServiceProbe(logger=self._logger, context=context)

    def group_created(self, group_id: str, name: str, tenant_id: str) -> None:
        self._logger.info(
            "client_group_created",
            group_id=group_id,
            name=name,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def group_updated(self, group_id: str, name: str, tenant_id: str) -> None:
        self._logger.info(
            "client_group_updated",
            group_id=group_id,
            name=name,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: str, tenant_id: str) -> None:
        self._logger.info(
            "client_group_deleted",
            group_id=group_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_group_name_rejected(self, name: str, tenant_id: str) -> None:
        self._logger.info(
            "client_group_duplicate_name_rejected",
            name=name,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def client_added_to_group(
        self, group_id: str, client_id: str, tenant_id: str
    ) -> None:
        self._logger.info(
            "client_added_to_group",
            group_id=group_id,
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def client_removed_from_group(
        self, group_id: str, client_id: str, tenant_id: str
    ) -> None:
        self._logger.info(
            "client_removed_from_group",
            group_id=group_id,
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def membership_target_not_found(
        self, group_id: str, client_id: str, tenant_id: str
    ) -> None:
        self._logger.debug(
            "client_group_membership_target_not_found",
            group_id=group_id,
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def event_publish_failed(self, event_type: str, error: str) -> None:
        self._logger.error(
            "client_group_event_publish_failed",
            event_type=event_type,
            error=error,
            **self._get_context_kwargs(),
        )
