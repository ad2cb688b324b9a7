"""Message bus adapters (Redis Streams and in-memory)."""

from infrastructure.messaging.client import create_redis_client
from infrastructure.messaging.consumer import MessageHandler, RedisStreamConsumer
from infrastructure.messaging.exceptions import (
    EventPublishError,
    MessageDecodeError,
    MessagingError,
)
from infrastructure.messaging.memory import InMemoryEventPublisher
from infrastructure.messaging.publisher import RedisStreamEventPublisher

__all__ = [
    "EventPublishError",
    "InMemoryEventPublisher",
    "MessageDecodeError",
    "MessageHandler",
    "MessagingError",
    "RedisStreamConsumer",
    "RedisStreamEventPublisher",
    "create_redis_client",
]
