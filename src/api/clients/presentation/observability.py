"""Domain probe for the HTTP facade.

Logs the entry of every operation and every unexpected failure with the
request's tenant, actor and request id. Failure details are logged here
and withheld from the response.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog

from shared_kernel.middleware import RequestContext
from shared_kernel.observability_context import ObservationContext


class ApiProbe(Protocol):
    """Domain probe for facade operations."""

    def operation_started(self, operation: str, **ids: str) -> None:
        """Record that an operation was invoked."""
        ...

    def operation_failed(self, operation: str, error: Exception) -> None:
        """Record an unexpected error that was reported as 500."""
        ...

    def with_context(self, context: ObservationContext) -> ApiProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultApiProbe:
    """Default implementation of ApiProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultApiProbe:
        return DefaultApiProbe(logger=self._logger, context=context)

    def operation_started(self, operation: str, **ids: str) -> None:
        self._logger.info(
            "api_operation_started",
            operation=operation,
            **ids,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "api_operation_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
            **self._get_context_kwargs(),
        )


def get_api_probe() -> ApiProbe:
    """Get ApiProbe instance."""
    return DefaultApiProbe()


def bind_request(probe: ApiProbe, context: RequestContext) -> ApiProbe:
    """Bind the request's identifiers to the probe."""
    return probe.with_context(
        ObservationContext(
            request_id=context.request_id,
            user_id=context.actor,
            tenant_id=context.tenant_id,
        )
    )
