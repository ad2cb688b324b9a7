"""Message bus integration for the Client Management context.

Contains the event serializer used by the publisher and the decoder for
inbound saga commands.
"""

from clients.infrastructure.messaging.commands import (
    INITIALIZE_COMMAND_TYPE,
    InitializeClientManagementMessage,
    decode_initialize_command,
)
from clients.infrastructure.messaging.serializer import ClientEventSerializer

__all__ = [
    "INITIALIZE_COMMAND_TYPE",
    "ClientEventSerializer",
    "InitializeClientManagementMessage",
    "decode_initialize_command",
]
