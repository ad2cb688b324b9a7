"""In-memory implementation of IEventPublisher.

Used when the message bus is disabled (local development) and in tests.
Events are kept in publish order and never leave the process.
"""

from __future__ import annotations

from collections import deque
from typing import Any

from shared_kernel.messaging import IEventPublisher


class InMemoryEventPublisher(IEventPublisher):
    """Records published events, keeping at most ``max_events`` of them.

    Once full, the oldest event is dropped for each new one. ``None`` keeps
    every event.
    """

    def __init__(self, max_events: int | None = None) -> None:
        self.published: deque[Any] = deque(maxlen=max_events)

    async def publish(self, event: Any) -> None:
        self.published.append(event)

    def of_type(self, event_type: type) -> list[Any]:
        """Published events of the given class, in publish order."""
        return [event for event in self.published if isinstance(event, event_type)]

    def clear(self) -> None:
        self.published.clear()
