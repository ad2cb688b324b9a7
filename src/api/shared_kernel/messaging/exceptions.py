"""Exceptions raised through the message bus ports."""


class MessagingError(Exception):
    """Base exception for message bus operations."""

    pass


class EventPublishError(MessagingError):
    """Raised when an event could not be handed to the bus."""

    def __init__(self, message: str, event_type: str | None = None):
        super().__init__(message)
        self.event_type = event_type
