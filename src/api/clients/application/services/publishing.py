"""Post-commit event publishing shared by the application services."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from shared_kernel.messaging import EventPublishError, IEventPublisher


class _PublishFailureProbe(Protocol):
    def event_publish_failed(self, event_type: str, error: str) -> None: ...


async def publish_committed(
    publisher: IEventPublisher,
    events: Iterable[Any],
    probe: _PublishFailureProbe,
) -> None:
    """Publish events of a transaction that has already committed.

    The change is durable whether or not the bus accepts the events, so a
    publish failure is reported through the probe and not raised. Such an
    event is lost: delivery from here is at most once.
    """
    for event in events:
        try:
            await publisher.publish(event)
        except EventPublishError as e:
            probe.event_publish_failed(type(event).__name__, str(e))
