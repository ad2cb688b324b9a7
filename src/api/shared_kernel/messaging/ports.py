"""Protocols (ports) for publishing domain events to the message bus.

These protocols keep the application layer independent of the transport.
Each bounded context registers a serializer for its own events so the
shared kernel never needs to know concrete event structures.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IEventPublisher(Protocol):
    """Publishes domain events to the message bus.

    Publishing is fire-and-forget from the caller's perspective: delivery
    is at-least-once once the bus has accepted the event, and no
    acknowledgment from consumers is tracked.
    """

    async def publish(self, event: Any) -> None:
        """Publish a single domain event.

        Args:
            event: The domain event to publish

        Raises:
            EventPublishError: If the bus rejects or cannot be reached
        """
        ...


@runtime_checkable
class EventSerializer(Protocol):
    """Serializes and deserializes domain events.

    Each bounded context provides its own implementation that knows how to
    serialize its domain events to JSON-compatible dictionaries and
    deserialize them back.
    """

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this serializer handles."""
        ...

    def serialize(self, event: Any) -> dict[str, Any]:
        """Convert a domain event to a JSON-serializable dictionary.

        Raises:
            ValueError: If the event type is not supported
        """
        ...

    def deserialize(
        self,
        event_type: str,
        payload: dict[str, Any],
    ) -> Any:
        """Reconstruct a domain event from a payload.

        Raises:
            ValueError: If the event type is not supported
        """
        ...
