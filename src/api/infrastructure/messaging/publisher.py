"""Redis Streams implementation of IEventPublisher.

Each event type gets its own stream, ``{prefix}.{EventType}``, so
subscribers can create consumer groups for exactly the events they need.
"""

from __future__ import annotations

import json
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

from infrastructure.messaging.exceptions import EventPublishError
from infrastructure.messaging.observability import (
    DefaultEventPublisherProbe,
    EventPublisherProbe,
)
from infrastructure.settings import MessageBusSettings
from shared_kernel.messaging import EventSerializer, IEventPublisher


class RedisStreamEventPublisher(IEventPublisher):
    """Publishes serialized domain events with XADD.

    Stream entries carry the event type, the JSON payload and the envelope
    fields consumers commonly filter on (tenant, correlation id, source).
    Streams are trimmed approximately to ``stream_maxlen`` entries.
    """

    def __init__(
        self,
        redis: Redis,
        settings: MessageBusSettings,
        serializer: EventSerializer,
        probe: EventPublisherProbe | None = None,
    ) -> None:
        self._redis = redis
        self._settings = settings
        self._serializer = serializer
        self._probe = probe or DefaultEventPublisherProbe()

    async def publish(self, event: Any) -> None:
        event_type = type(event).__name__
        stream = self._settings.stream_name(event_type)
        payload = self._serializer.serialize(event)
        fields = {
            "event_type": event_type,
            "payload": json.dumps(payload),
            "occurred_at": payload.get("occurred_at", ""),
            "correlation_id": payload.get("correlation_id", ""),
            "tenant_id": payload.get("tenant_id", ""),
            "source": payload.get("source", ""),
        }

        try:
            message_id = await self._redis.xadd(
                name=stream,
                fields=fields,
                maxlen=self._settings.stream_maxlen,
                approximate=True,
            )
        except RedisError as e:
            self._probe.event_publish_failed(event_type, stream, str(e))
            raise EventPublishError(
                f"Failed to publish {event_type} to {stream}: {e}",
                event_type=event_type,
            ) from e

        self._probe.event_published(event_type, stream, str(message_id))
