"""Protocol for user-client association service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserClientAssociationServiceProbe(Protocol):
    """Domain probe for user-client association operations."""

    def user_assigned(self, user_id: str, client_id: str, tenant_id: str) -> None:
        ...

    def user_already_assigned(
        self, user_id: str, client_id: str, tenant_id: str
    ) -> None:
        ...

    def user_unassigned(self, user_id: str, client_id: str, tenant_id: str) -> None:
        ...

    def assignment_rejected(
        self, user_id: str, client_id: str, tenant_id: str, reason: str
    ) -> None:
        """Record that the client or the user could not be found."""
        ...

    def event_publish_failed(self, event_type: str, error: str) -> None: ...

    def with_context(
        self, context: ObservationContext
    ) -> UserClientAssociationServiceProbe: ...


class DefaultUserClientAssociationServiceProbe:
    """Default implementation of UserClientAssociationServiceProbe using structlog."""

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
    ) -> DefaultUserClientAssociationServiceProbe:
        return DefaultUserClientAssociationServiceProbe(
            logger=self._logger, context=context
        )

    def user_assigned(self, user_id: str, client_id: str, tenant_id: str) -> None:
        self._logger.info(
            "user_assigned_to_client",
            user_id=user_id,
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def user_already_assigned(
        self, user_id: str, client_id: str, tenant_id: str
    ) -> None:
        self._logger.debug(
            "user_already_assigned_to_client",
            user_id=user_id,
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def user_unassigned(self, user_id: str, client_id: str, tenant_id: str) -> None:
        self._logger.info(
            "user_removed_from_client",
            user_id=user_id,
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def assignment_rejected(
        self, user_id: str, client_id: str, tenant_id: str, reason: str
    ) -> None:
        self._logger.info(
            "user_assignment_rejected",
            user_id=user_id,
            client_id=client_id,
            tenant_id=tenant_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def event_publish_failed(self, event_type: str, error: str) -> None:
        self._logger.error(
            "user_client_association_event_publish_failed",
            event_type=event_type,
            error=error,
            **self._get_context_kwargs(),
        )
