"""Message bus dependencies for the Client Management context.

Composes the shared Redis client with this context's event serializer.
With the bus disabled, events go to a process-wide in-memory publisher.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from clients.infrastructure.messaging import ClientEventSerializer
from infrastructure.dependencies import get_redis_client
from infrastructure.messaging import InMemoryEventPublisher, RedisStreamEventPublisher
from infrastructure.settings import MessageBusSettings, get_message_bus_settings
from shared_kernel.messaging import IEventPublisher


IN_MEMORY_EVENT_LIMIT = 1000
"""Most recent events kept by the process-wide in-memory publisher."""


@lru_cache
def get_in_memory_publisher() -> InMemoryEventPublisher:
    """Get the process-wide in-memory publisher (singleton)."""
    return InMemoryEventPublisher(max_events=IN_MEMORY_EVENT_LIMIT)


def build_event_publisher(settings: MessageBusSettings) -> IEventPublisher:
    """Select the publisher for the configured bus.

    Args:
        settings: Message bus settings

    Returns:
        Redis Streams publisher when the bus is enabled, otherwise the
        in-memory publisher
    """
    if not settings.enabled:
        return get_in_memory_publisher()
    return RedisStreamEventPublisher(
        redis=get_redis_client(),
        settings=settings,
        serializer=ClientEventSerializer(),
    )


def get_event_publisher(
    settings: Annotated[MessageBusSettings, Depends(get_message_bus_settings)],
) -> IEventPublisher:
    """Get the event publisher (FastAPI dependency)."""
    return build_event_publisher(settings)
