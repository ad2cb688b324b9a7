"""Decoding of inbound commands read from the message bus.

Commands arrive as stream entries whose ``payload`` field holds a JSON
document with camelCase keys, as produced by the saga coordinator.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from clients.application.initialization import InitializeClientManagementCommand
from infrastructure.messaging.exceptions import MessageDecodeError

INITIALIZE_COMMAND_TYPE = "InitializeClientManagementCommand"


class InitializeClientManagementMessage(BaseModel):
    """Wire format of InitializeClientManagementCommand."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    correlation_id: str = Field(min_length=1)
    tenant_id: str = Field(min_length=1)
    tenant_name: str = ""
    database_name: str = Field(min_length=1)

    def to_command(self) -> InitializeClientManagementCommand:
        return InitializeClientManagementCommand(
            correlation_id=self.correlation_id,
            tenant_id=self.tenant_id,
            tenant_name=self.tenant_name,
            database_name=self.database_name,
        )


def decode_initialize_command(
    fields: Mapping[str, str],
) -> InitializeClientManagementCommand:
    """Decode a stream entry into an initialization command.

    Raises:
        MessageDecodeError: If the payload is missing, not JSON, or lacks
            required fields
    """
    raw = fields.get("payload")
    if raw is None:
        raise MessageDecodeError("Message has no payload field")

    try:
        message = InitializeClientManagementMessage.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise MessageDecodeError(f"Invalid {INITIALIZE_COMMAND_TYPE}: {e}") from e

    return message.to_command()
