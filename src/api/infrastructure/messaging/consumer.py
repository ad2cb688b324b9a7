"""Redis Streams consumer for inbound commands.

The consumer runs as a background task within the FastAPI application.
It reads one stream through a consumer group and hands each entry to a
handler. Delivery is at-least-once:

- A message is acknowledged only after the handler returns.
- A failed message stays pending and is reclaimed once it has been idle
  for ``claim_idle_ms``, which gives the handler another attempt.
- After ``max_deliveries`` attempts, or immediately when it cannot be
  decoded, the message is copied to ``{stream}.dlq`` and acknowledged.

Handlers must therefore be safe to run more than once per message.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from datetime import UTC, datetime

from redis.asyncio import Redis
from redis.exceptions import RedisError, ResponseError

from infrastructure.messaging.exceptions import MessageDecodeError
from infrastructure.messaging.observability import (
    DefaultStreamConsumerProbe,
    StreamConsumerProbe,
)
from infrastructure.settings import MessageBusSettings

MessageHandler = Callable[[Mapping[str, str]], Awaitable[None]]


class RedisStreamConsumer:
    """Background consumer of a single Redis stream."""

    def __init__(
        self,
        redis: Redis,
        stream: str,
        handler: MessageHandler,
        settings: MessageBusSettings,
        probe: StreamConsumerProbe | None = None,
        error_backoff_seconds: float = 1.0,
    ) -> None:
        """Initialize the consumer.

        Args:
            redis: Client created with decode_responses=True
            stream: Stream to consume
            handler: Coroutine called with the entry fields of each message
            settings: Group, consumer name, batching and retry settings
            probe: Observability probe for logging
            error_backoff_seconds: Pause after a failed read before retrying
        """
        self._redis = redis
        self._stream = stream
        self._handler = handler
        self._group = settings.consumer_group
        self._consumer = settings.consumer_name
        self._batch_size = settings.batch_size
        self._block_ms = settings.block_ms
        self._claim_idle_ms = settings.claim_idle_ms
        self._max_deliveries = settings.max_deliveries
        self._probe = probe or DefaultStreamConsumerProbe()
        self._error_backoff = error_backoff_seconds
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def stream(self) -> str:
        return self._stream

    @property
    def dead_letter_stream(self) -> str:
        return f"{self._stream}.dlq"

    async def start(self) -> None:
        """Create the consumer group if needed and start the read loop."""
        await self.ensure_group()
        self._running = True
        self._task = asyncio.create_task(self._run())
        self._probe.consumer_started(self._stream, self._group, self._consumer)

    async def stop(self) -> None:
        """Stop the read loop and wait for it to finish."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        self._probe.consumer_stopped(self._stream)

    async def ensure_group(self) -> None:
        try:
            await self._redis.xgroup_create(
                name=self._stream,
                groupname=self._group,
                id="0",
                mkstream=True,
            )
        except ResponseError as e:
            if "BUSYGROUP" not in str(e):
                raise

    async def _run(self) -> None:
        while self._running:
            try:
                await self.recover_pending()
                await self.poll_once()
            except RedisError as e:
                self._probe.consumer_loop_error(self._stream, str(e))
                await asyncio.sleep(self._error_backoff)

    async def poll_once(self) -> int:
        """Read and handle one batch of new messages.

        Returns:
            Number of messages acknowledged
        """
        response = await self._redis.xreadgroup(
            groupname=self._group,
            consumername=self._consumer,
            streams={self._stream: ">"},
            count=self._batch_size,
            block=self._block_ms,
        )

        acknowledged = 0
        for _stream, entries in response or []:
            for message_id, fields in entries:
                if await self._process(message_id, fields):
                    acknowledged += 1
        return acknowledged

    async def recover_pending(self) -> int:
        """Reclaim messages left pending by failed or crashed handlers.

        Returns:
            Number of messages acknowledged, dead-lettered ones included
        """
        pending = await self._redis.xpending_range(
            name=self._stream,
            groupname=self._group,
            min="-",
            max="+",
            count=self._batch_size,
            idle=self._claim_idle_ms,
        )

        acknowledged = 0
        for entry in pending:
            message_id = entry["message_id"]
            deliveries = entry["times_delivered"]

            claimed = await self._redis.xclaim(
                name=self._stream,
                groupname=self._group,
                consumername=self._consumer,
                min_idle_time=self._claim_idle_ms,
                message_ids=[message_id],
            )
            if not claimed:
                # Another consumer claimed it first
                continue

            _, fields = claimed[0]
            if deliveries >= self._max_deliveries:
                await self._dead_letter(
                    message_id, fields or {}, "max deliveries exceeded", deliveries
                )
                acknowledged += 1
            elif await self._process(message_id, fields or {}):
                acknowledged += 1
        return acknowledged

    async def _process(self, message_id: str, fields: Mapping[str, str]) -> bool:
        try:
            await self._handler(fields)
        except MessageDecodeError as e:
            await self._dead_letter(message_id, fields, str(e), deliveries=1)
            return True
        except Exception as e:
            self._probe.message_failed(self._stream, message_id, str(e))
            return False

        await self._redis.xack(self._stream, self._group, message_id)
        self._probe.message_processed(self._stream, message_id)
        return True

    async def _dead_letter(
        self,
        message_id: str,
        fields: Mapping[str, str],
        reason: str,
        deliveries: int,
    ) -> None:
        await self._redis.xadd(
            name=self.dead_letter_stream,
            fields={
                **fields,
                "original_message_id": message_id,
                "dead_letter_reason": reason,
                "deliveries": str(deliveries),
                "dead_lettered_at": datetime.now(UTC).isoformat(),
            },
        )
        await self._redis.xack(self._stream, self._group, message_id)
        self._probe.message_dead_lettered(self._stream, message_id, reason, deliveries)
