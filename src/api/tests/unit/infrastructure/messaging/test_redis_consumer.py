"""Unit tests for the Redis Streams consumer.

Drives single iterations (poll_once, recover_pending) against a mocked
Redis client rather than the background loop.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ResponseError

from infrastructure.messaging import MessageDecodeError, RedisStreamConsumer
from infrastructure.messaging.observability import StreamConsumerProbe
from infrastructure.settings import MessageBusSettings

STREAM = "cm.InitializeClientManagement"
FIELDS = {"payload": '{"tenantId": "tenant-a"}'}


@pytest.fixture
def settings() -> MessageBusSettings:
    return MessageBusSettings(
        consumer_group="cm-group",
        consumer_name="cm-1",
        batch_size=5,
        block_ms=10,
        claim_idle_ms=1000,
        max_deliveries=3,
    )


@pytest.fixture
def mock_redis() -> AsyncMock:
    redis = AsyncMock()
    redis.xreadgroup.return_value = []
    redis.xpending_range.return_value = []
    return redis


@pytest.fixture
def handler() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=StreamConsumerProbe)


@pytest.fixture
def consumer(mock_redis, handler, settings, mock_probe) -> RedisStreamConsumer:
    return RedisStreamConsumer(
        redis=mock_redis,
        stream=STREAM,
        handler=handler,
        settings=settings,
        probe=mock_probe,
        error_backoff_seconds=0,
    )


class TestEnsureGroup:
    @pytest.mark.asyncio
    async def test_creates_group_and_stream(self, consumer, mock_redis):
        await consumer.ensure_group()

        mock_redis.xgroup_create.assert_awaited_once_with(
            name=STREAM, groupname="cm-group", id="0", mkstream=True
        )

    @pytest.mark.asyncio
    async def test_existing_group_is_fine(self, consumer, mock_redis):
        mock_redis.xgroup_create.side_effect = ResponseError(
            "BUSYGROUP Consumer Group name already exists"
        )

        await consumer.ensure_group()

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, consumer, mock_redis):
        mock_redis.xgroup_create.side_effect = ResponseError("WRONGTYPE")

        with pytest.raises(ResponseError):
            await consumer.ensure_group()


class TestPollOnce:
    @pytest.mark.asyncio
    async def test_acknowledges_handled_messages(
        self, consumer, mock_redis, handler, mock_probe
    ):
        mock_redis.xreadgroup.return_value = [
            [STREAM, [("1-0", FIELDS), ("2-0", FIELDS)]]
        ]

        acknowledged = await consumer.poll_once()

        assert acknowledged == 2
        assert handler.await_count == 2
        mock_redis.xack.assert_any_await(STREAM, "cm-group", "1-0")
        mock_redis.xack.assert_any_await(STREAM, "cm-group", "2-0")
        assert mock_probe.message_processed.call_count == 2

    @pytest.mark.asyncio
    async def test_reads_new_messages_for_this_consumer(self, consumer, mock_redis):
        await consumer.poll_once()

        mock_redis.xreadgroup.assert_awaited_once_with(
            groupname="cm-group",
            consumername="cm-1",
            streams={STREAM: ">"},
            count=5,
            block=10,
        )

    @pytest.mark.asyncio
    async def test_failed_handler_leaves_message_pending(
        self, consumer, mock_redis, handler, mock_probe
    ):
        mock_redis.xreadgroup.return_value = [[STREAM, [("1-0", FIELDS)]]]
        handler.side_effect = RuntimeError("database unavailable")

        acknowledged = await consumer.poll_once()

        assert acknowledged == 0
        mock_redis.xack.assert_not_awaited()
        mock_probe.message_failed.assert_called_once_with(
            STREAM, "1-0", "database unavailable"
        )

    @pytest.mark.asyncio
    async def test_undecodable_message_is_dead_lettered(
        self, consumer, mock_redis, handler, mock_probe
    ):
        mock_redis.xreadgroup.return_value = [[STREAM, [("1-0", FIELDS)]]]
        handler.side_effect = MessageDecodeError("payload is not JSON")

        acknowledged = await consumer.poll_once()

        assert acknowledged == 1
        dlq_call = mock_redis.xadd.await_args.kwargs
        assert dlq_call["name"] == f"{STREAM}.dlq"
        assert dlq_call["fields"]["original_message_id"] == "1-0"
        assert dlq_call["fields"]["dead_letter_reason"] == "payload is not JSON"
        assert dlq_call["fields"]["payload"] == FIELDS["payload"]
        mock_redis.xack.assert_awaited_once_with(STREAM, "cm-group", "1-0")
        mock_probe.message_dead_lettered.assert_called_once_with(
            STREAM, "1-0", "payload is not JSON", 1
        )


class TestRecoverPending:
    @pytest.mark.asyncio
    async def test_retries_idle_message(self, consumer, mock_redis, handler):
        mock_redis.xpending_range.return_value = [
            {"message_id": "1-0", "times_delivered": 1}
        ]
        mock_redis.xclaim.return_value = [("1-0", FIELDS)]

        acknowledged = await consumer.recover_pending()

        assert acknowledged == 1
        handler.assert_awaited_once_with(FIELDS)
        mock_redis.xclaim.assert_awaited_once_with(
            name=STREAM,
            groupname="cm-group",
            consumername="cm-1",
            min_idle_time=1000,
            message_ids=["1-0"],
        )
        mock_redis.xack.assert_awaited_once_with(STREAM, "cm-group", "1-0")

    @pytest.mark.asyncio
    async def test_dead_letters_after_max_deliveries(
        self, consumer, mock_redis, handler, mock_probe
    ):
        mock_redis.xpending_range.return_value = [
            {"message_id": "1-0", "times_delivered": 3}
        ]
        mock_redis.xclaim.return_value = [("1-0", FIELDS)]

        acknowledged = await consumer.recover_pending()

        assert acknowledged == 1
        handler.assert_not_awaited()
        fields = mock_redis.xadd.await_args.kwargs["fields"]
        assert fields["deliveries"] == "3"
        mock_probe.message_dead_lettered.assert_called_once_with(
            STREAM, "1-0", "max deliveries exceeded", 3
        )

    @pytest.mark.asyncio
    async def test_skips_message_claimed_elsewhere(
        self, consumer, mock_redis, handler
    ):
        mock_redis.xpending_range.return_value = [
            {"message_id": "1-0", "times_delivered": 1}
        ]
        mock_redis.xclaim.return_value = []

        acknowledged = await consumer.recover_pending()

        assert acknowledged == 0
        handler.assert_not_awaited()
        mock_redis.xack.assert_not_awaited()


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_and_stop(self, consumer, mock_redis, mock_probe):
        async def blocking_read(**kwargs):
            await asyncio.sleep(0.01)
            return []

        mock_redis.xreadgroup.side_effect = blocking_read

        await consumer.start()
        await asyncio.sleep(0)
        await consumer.stop()

        mock_redis.xgroup_create.assert_awaited_once()
        mock_probe.consumer_started.assert_called_once_with(
            STREAM, "cm-group", "cm-1"
        )
        mock_probe.consumer_stopped.assert_called_once_with(STREAM)

    def test_dead_letter_stream_name(self, consumer):
        assert consumer.dead_letter_stream == f"{STREAM}.dlq"
