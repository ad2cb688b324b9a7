"""Shared infrastructure dependencies.

Provides ONLY raw message bus resources (the Redis client).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from functools import lru_cache

from redis.asyncio import Redis

from infrastructure.messaging.client import create_redis_client
from infrastructure.settings import get_message_bus_settings


@lru_cache
def get_redis_client() -> Redis:
    """Get application-scoped Redis client (singleton).

    The client keeps its own connection pool and is shared across all
    requests and the stream consumer.

    Returns:
        Redis client configured from the message bus settings.
    """
    return create_redis_client(get_message_bus_settings())


async def close_redis_client() -> None:
    """Close the Redis client if it was created.

    Called on application shutdown.
    """
    if get_redis_client.cache_info().currsize == 0:
        return
    await get_redis_client().aclose()
    get_redis_client.cache_clear()
