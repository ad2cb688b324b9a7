"""Redis client factory for the message bus."""

from __future__ import annotations

from redis.asyncio import Redis

from infrastructure.settings import MessageBusSettings


def create_redis_client(settings: MessageBusSettings) -> Redis:
    """Create an asyncio Redis client that decodes responses to str.

    The client connects lazily on first command.
    """
    return Redis.from_url(settings.redis_url, decode_responses=True)
