"""Domain probes for Client Management repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to client, group and association
persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class _StructlogProbe:
    """Shared plumbing for the structlog-backed repository probes."""

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

    def with_context(self, context: ObservationContext):
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)


class ClientRepositoryProbe(Protocol):
    """Domain probe for client repository operations."""

    def client_saved(self, client_id: str, tenant_id: str) -> None:
        """Record that a client row was inserted or replaced."""
        ...

    def client_not_found(self, client_id: str, tenant_id: str) -> None:
        """Record that no live client matched id and tenant."""
        ...

    def client_soft_deleted(self, client_id: str, tenant_id: str, actor: str) -> None:
        """Record that a client was marked deleted."""
        ...

    def duplicate_identifier(self, field: str, value: str, tenant_id: str) -> None:
        """Record that a unique index rejected a client identifier."""
        ...

    def clients_listed(self, tenant_id: str, count: int, total: int) -> None:
        """Record a page of clients being read."""
        ...

    def with_context(self, context: ObservationContext) -> ClientRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultClientRepositoryProbe(_StructlogProbe):
    """Default implementation of ClientRepositoryProbe using structlog."""

    def client_saved(self, client_id: str, tenant_id: str) -> None:
        self._logger.info(
            "client_saved",
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def client_not_found(self, client_id: str, tenant_id: str) -> None:
        self._logger.debug(
            "client_not_found",
            client_id=client_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def client_soft_deleted(self, client_id: str, tenant_id: str, actor: str) -> None:
        self._logger.info(
            "client_soft_deleted",
            client_id=client_id,
            tenant_id=tenant_id,
            deleted_by=actor,
            **self._get_context_kwargs(),
        )

    def duplicate_identifier(self, field: str, value: str, tenant_id: str) -> None:
        self._logger.warning(
            "duplicate_client_identifier",
            field=field,
            value=value,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def clients_listed(self, tenant_id: str, count: int, total: int) -> None:
        self._logger.debug(
            "clients_listed",
            tenant_id=tenant_id,
            count=count,
            total=total,
            **self._get_context_kwargs(),
        )


class ClientGroupRepositoryProbe(Protocol):
    """Domain probe for client group and membership persistence."""

    def group_saved(self, group_id: str, tenant_id: str) -> None:
        """Record that a group row was inserted or replaced."""
        ...

    def group_not_found(self, group_id: str, tenant_id: str) -> None:
        """Record that no live group matched id and tenant."""
        ...

    def group_soft_deleted(self, group_id: str, tenant_id: str, actor: str) -> None:
        """Record that a group was marked deleted."""
        ...

    def duplicate_group_name(self, name: str, tenant_id: str) -> None:
        """Record that a unique index rejected a group name."""
        ...

    def membership_added(self, group_id: str, client_id: str) -> None:
        """Record that a membership row was inserted."""
        ...

    def membership_already_present(self, group_id: str, client_id: str) -> None:
        """Record that an add found the membership already in place."""
        ...

    def membership_removed(self, group_id: str, client_id: str) -> None:
        """Record that a membership row was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> ClientGroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultClientGroupRepositoryProbe(_StructlogProbe):
    """Default implementation of ClientGroupRepositoryProbe using structlog."""

    def group_saved(self, group_id: str, tenant_id: str) -> None:
        self._logger.info(
            "client_group_saved",
            group_id=group_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: str, tenant_id: str) -> None:
        self._logger.debug(
            "client_group_not_found",
            group_id=group_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def group_soft_deleted(self, group_id: str, tenant_id: str, actor: str) -> None:
        self._logger.info(
            "client_group_soft_deleted",
            group_id=group_id,
            tenant_id=tenant_id,
            deleted_by=actor,
            **self._get_context_kwargs(),
        )

    def duplicate_group_name(self, name: str, tenant_id: str) -> None:
        self._logger.warning(
            "duplicate_client_group_name",
            name=name,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def membership_added(self, group_id: str, client_id: str) -> None:
        self._logger.info(
            "client_group_membership_added",
            group_id=group_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def membership_already_present(self, group_id: str, client_id: str) -> None:
        self._logger.debug(
            "client_group_membership_already_present",
            group_id=group_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def membership_removed(self, group_id: str, client_id: str) -> None:
        self._logger.info(
            "client_group_membership_removed",
            group_id=group_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )


class UserClientAssociationRepositoryProbe(Protocol):
    """Domain probe for user-client association persistence."""

    def association_saved(self, association_id: str, tenant_id: str) -> None:
        """Record that an association row was inserted."""
        ...

    def duplicate_association(self, user_id: str, client_id: str) -> None:
        """Record that the unique constraint rejected an association."""
        ...

    def association_deleted(self, user_id: str, client_id: str) -> None:
        """Record that an association row was removed."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> UserClientAssociationRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserClientAssociationRepositoryProbe(_StructlogProbe):
    """Default implementation of UserClientAssociationRepositoryProbe."""

    def association_saved(self, association_id: str, tenant_id: str) -> None:
        self._logger.info(
            "user_client_association_saved",
            association_id=association_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def duplicate_association(self, user_id: str, client_id: str) -> None:
        self._logger.warning(
            "duplicate_user_client_association",
            user_id=user_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def association_deleted(self, user_id: str, client_id: str) -> None:
        self._logger.info(
            "user_client_association_deleted",
            user_id=user_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )
