"""Domain probe for request context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the tenant and the actor
of an incoming request.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RequestContextProbe(Protocol):
    """Domain probe for request context resolution operations."""

    def tenant_resolved(self, tenant_id: str, source: str) -> None:
        """Record that the tenant was resolved for a request."""
        ...

    def tenant_missing(self) -> None:
        """Record that no tenant could be resolved and the request was rejected."""
        ...

    def actor_resolved(self, actor: str, source: str) -> None:
        """Record where the actor identity of a request came from."""
        ...

    def gateway_claims_unreadable(self, error: Exception) -> None:
        """Record that a bearer token could not be decoded into claims."""
        ...

    def with_context(self, context: ObservationContext) -> RequestContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRequestContextProbe:
    """Default implementation of RequestContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRequestContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultRequestContextProbe(logger=self._logger, context=context)

    def tenant_resolved(self, tenant_id: str, source: str) -> None:
        """Record that the tenant was resolved for a request."""
        self._logger.debug(
            "tenant_context_resolved",
            tenant_id=tenant_id,
            source=source,
            **self._get_context_kwargs(),
        )

    def tenant_missing(self) -> None:
        """Record that no tenant could be resolved and the request was rejected."""
        self._logger.warning(
            "tenant_context_missing",
            **self._get_context_kwargs(),
        )

    def actor_resolved(self, actor: str, source: str) -> None:
        """Record where the actor identity of a request came from."""
        self._logger.debug(
            "actor_identity_resolved",
            actor=actor,
            source=source,
            **self._get_context_kwargs(),
        )

    def gateway_claims_unreadable(self, error: Exception) -> None:
        """Record that a bearer token could not be decoded into claims."""
        self._logger.warning(
            "gateway_claims_unreadable",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
