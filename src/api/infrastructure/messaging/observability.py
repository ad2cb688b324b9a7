"""Observability probes for the message bus adapters.

Following Domain Oriented Observability, probes capture domain-significant
events without cluttering transport code with logging concerns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EventPublisherProbe(Protocol):
    """Protocol for event publisher observability."""

    def event_published(self, event_type: str, stream: str, message_id: str) -> None:
        """Called when the bus accepted an event."""
        ...

    def event_publish_failed(self, event_type: str, stream: str, error: str) -> None:
        """Called when handing an event to the bus failed."""
        ...


class StreamConsumerProbe(Protocol):
    """Protocol for stream consumer observability."""

    def consumer_started(self, stream: str, group: str, consumer: str) -> None:
        """Called when the consumer loop starts."""
        ...

    def consumer_stopped(self, stream: str) -> None:
        """Called when the consumer loop stops."""
        ...

    def message_processed(self, stream: str, message_id: str) -> None:
        """Called when a message was handled and acknowledged."""
        ...

    def message_failed(self, stream: str, message_id: str, error: str) -> None:
        """Called when handling failed; the message stays pending for redelivery."""
        ...

    def message_dead_lettered(
        self, stream: str, message_id: str, reason: str, deliveries: int
    ) -> None:
        """Called when a message was moved to the dead-letter stream."""
        ...

    def consumer_loop_error(self, stream: str, error: str) -> None:
        """Called when reading from the stream failed."""
        ...


class DefaultEventPublisherProbe:
    """Default implementation of EventPublisherProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultEventPublisherProbe:
        """Create a new probe with observation context bound."""
        return DefaultEventPublisherProbe(logger=self._logger, context=context)

    def event_published(self, event_type: str, stream: str, message_id: str) -> None:
        self._logger.debug(
            "event_published",
            event_type=event_type,
            stream=stream,
            message_id=message_id,
            **self._get_context_kwargs(),
        )

    def event_publish_failed(self, event_type: str, stream: str, error: str) -> None:
        self._logger.error(
            "event_publish_failed",
            event_type=event_type,
            stream=stream,
            error=error,
            **self._get_context_kwargs(),
        )


class DefaultStreamConsumerProbe:
    """Default implementation of StreamConsumerProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def consumer_started(self, stream: str, group: str, consumer: str) -> None:
        self._logger.info(
            "stream_consumer_started", stream=stream, group=group, consumer=consumer
        )

    def consumer_stopped(self, stream: str) -> None:
        self._logger.info("stream_consumer_stopped", stream=stream)

    def message_processed(self, stream: str, message_id: str) -> None:
        self._logger.info(
            "stream_message_processed", stream=stream, message_id=message_id
        )

    def message_failed(self, stream: str, message_id: str, error: str) -> None:
        self._logger.warning(
            "stream_message_failed",
            stream=stream,
            message_id=message_id,
            error=error,
        )

    def message_dead_lettered(
        self, stream: str, message_id: str, reason: str, deliveries: int
    ) -> None:
        self._logger.error(
            "stream_message_dead_lettered",
            stream=stream,
            message_id=message_id,
            reason=reason,
            deliveries=deliveries,
        )

    def consumer_loop_error(self, stream: str, error: str) -> None:
        self._logger.error("stream_consumer_loop_error", stream=stream, error=error)
