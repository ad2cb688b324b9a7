"""Client Management event serializer for the message bus.

This module provides serialization and deserialization of domain events
published to the message bus. Events are converted to JSON-compatible
dictionaries and reconstructed by consumers and tests.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from enum import Enum
from typing import Any, get_args

from clients.domain.events import ClientSnapshot, DomainEvent

# Derive supported events from the DomainEvent type alias
_SUPPORTED_EVENTS: frozenset[str] = frozenset(
    cls.__name__ for cls in get_args(DomainEvent)
)

# Build registry mapping event type names to classes
_EVENT_REGISTRY: dict[str, type] = {cls.__name__: cls for cls in get_args(DomainEvent)}

# Fields holding datetimes in addition to occurred_at
_DATETIME_FIELDS = ("occurred_at", "deleted_at", "initialized_at")


class ClientEventSerializer:
    """Serializes and deserializes Client Management domain events.

    This serializer handles all events defined in the DomainEvent type
    alias. Datetimes become ISO 8601 strings and enums their values.
    """

    def supported_event_types(self) -> frozenset[str]:
        """Return the event type names this serializer handles."""
        return _SUPPORTED_EVENTS

    def serialize(self, event: DomainEvent) -> dict[str, Any]:
        """Convert a domain event to a JSON-serializable dictionary.

        Args:
            event: The domain event to serialize

        Returns:
            Dictionary with all event fields

        Raises:
            ValueError: If the event type is not supported
        """
        event_type = type(event).__name__
        if event_type not in _SUPPORTED_EVENTS:
            raise ValueError(f"Unsupported event type: {event_type}")

        # asdict recurses into the nested ClientSnapshot
        data = asdict(event)
        self._convert_for_json(data)
        return data

    def deserialize(
        self,
        event_type: str,
        payload: dict[str, Any],
    ) -> Any:
        """Reconstruct a domain event from a payload.

        Args:
            event_type: The name of the event type
            payload: The serialized event data

        Returns:
            The reconstructed domain event

        Raises:
            ValueError: If the event type is not supported
        """
        event_class = _EVENT_REGISTRY.get(event_type)
        if event_class is None:
            raise ValueError(f"Unsupported event type: {event_type}")

        data = payload.copy()
        self._convert_from_json(data)
        return event_class(**data)

    def _convert_for_json(self, data: dict[str, Any]) -> None:
        for key, value in list(data.items()):
            if isinstance(value, datetime):
                data[key] = value.isoformat()
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, dict):
                self._convert_for_json(value)

    def _convert_from_json(self, data: dict[str, Any]) -> None:
        for key in _DATETIME_FIELDS:
            if isinstance(data.get(key), str):
                data[key] = datetime.fromisoformat(data[key])

        if isinstance(data.get("client"), dict):
            data["client"] = ClientSnapshot(**data["client"])
