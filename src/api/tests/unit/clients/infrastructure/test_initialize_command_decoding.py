"""Unit tests for decoding InitializeClientManagementCommand messages."""

import json

import pytest

from clients.infrastructure.messaging import decode_initialize_command
from infrastructure.messaging import MessageDecodeError


def entry(payload) -> dict[str, str]:
    return {
        "event_type": "InitializeClientManagementCommand",
        "payload": payload if isinstance(payload, str) else json.dumps(payload),
    }


class TestDecodeInitializeCommand:
    def test_decodes_camel_case_payload(self):
        command = decode_initialize_command(
            entry(
                {
                    "correlationId": "saga-1",
                    "tenantId": "tenant-a",
                    "tenantName": "Acme",
                    "databaseName": "tenant_a_db",
                }
            )
        )

        assert command.correlation_id == "saga-1"
        assert command.tenant_id == "tenant-a"
        assert command.tenant_name == "Acme"
        assert command.database_name == "tenant_a_db"

    def test_accepts_snake_case_and_missing_tenant_name(self):
        command = decode_initialize_command(
            entry(
                {
                    "correlation_id": "saga-1",
                    "tenant_id": "tenant-a",
                    "database_name": "tenant_a_db",
                }
            )
        )

        assert command.tenant_name == ""

    def test_missing_payload_field(self):
        with pytest.raises(MessageDecodeError, match="no payload"):
            decode_initialize_command({"event_type": "x"})

    def test_payload_is_not_json(self):
        with pytest.raises(MessageDecodeError):
            decode_initialize_command(entry("{not json"))

    @pytest.mark.parametrize("missing", ["tenantId", "databaseName", "correlationId"])
    def test_required_fields(self, missing):
        payload = {
            "correlationId": "saga-1",
            "tenantId": "tenant-a",
            "databaseName": "tenant_a_db",
        }
        del payload[missing]

        with pytest.raises(MessageDecodeError):
            decode_initialize_command(entry(payload))

    def test_blank_database_name_is_rejected(self):
        with pytest.raises(MessageDecodeError):
            decode_initialize_command(
                entry(
                    {
                        "correlationId": "saga-1",
                        "tenantId": "tenant-a",
                        "databaseName": "   ",
                    }
                )
            )
