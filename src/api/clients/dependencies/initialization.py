"""Wiring of the tenant initialization consumer.

Called from the application lifespan rather than per request.
"""

from __future__ import annotations

from collections.abc import Mapping

from redis.asyncio import Redis

from clients.application.initialization import ClientManagementInitializer
from clients.dependencies.messaging import build_event_publisher
from clients.infrastructure.client_group_repository import ClientGroupRepository
from clients.infrastructure.messaging import (
    INITIALIZE_COMMAND_TYPE,
    decode_initialize_command,
)
from clients.infrastructure.tenant_database import TenantDatabaseFactory
from infrastructure.messaging import RedisStreamConsumer
from infrastructure.settings import DatabaseSettings, MessageBusSettings


def build_initializer(
    database_settings: DatabaseSettings,
    bus_settings: MessageBusSettings,
) -> ClientManagementInitializer:
    """Build the initialization command handler."""
    return ClientManagementInitializer(
        databases=TenantDatabaseFactory(database_settings),
        group_repository_factory=ClientGroupRepository,
        publisher=build_event_publisher(bus_settings),
    )


def build_initialization_consumer(
    redis: Redis,
    database_settings: DatabaseSettings,
    bus_settings: MessageBusSettings,
) -> RedisStreamConsumer:
    """Build the consumer of InitializeClientManagementCommand messages.

    Args:
        redis: Shared Redis client
        database_settings: Shared settings used to reach tenant databases
        bus_settings: Message bus settings

    Returns:
        A consumer that is not yet started
    """
    initializer = build_initializer(database_settings, bus_settings)

    async def handle(fields: Mapping[str, str]) -> None:
        await initializer.handle(decode_initialize_command(fields))

    return RedisStreamConsumer(
        redis=redis,
        stream=bus_settings.stream_name(INITIALIZE_COMMAND_TYPE),
        handler=handle,
        settings=bus_settings,
    )
