"""Message bus ports shared across bounded contexts.

Bounded contexts publish their domain events through ``IEventPublisher``
and provide an ``EventSerializer`` for their own event types. The
transport (Redis Streams, in-memory) lives in ``infrastructure.messaging``.
"""

from shared_kernel.messaging.exceptions import EventPublishError, MessagingError
from shared_kernel.messaging.ports import (
    EventSerializer,
    IEventPublisher,
)

__all__ = [
    "EventPublishError",
    "EventSerializer",
    "IEventPublisher",
    "MessagingError",
]
