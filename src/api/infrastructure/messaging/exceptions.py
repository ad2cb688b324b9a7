"""Exceptions raised by the message bus adapters."""

from shared_kernel.messaging.exceptions import EventPublishError, MessagingError

__all__ = ["EventPublishError", "MessageDecodeError", "MessagingError"]


class MessageDecodeError(MessagingError):
    """Raised when an inbound message cannot be decoded.

    Undecodable messages will never succeed on retry and are dead-lettered
    immediately.
    """

    pass
