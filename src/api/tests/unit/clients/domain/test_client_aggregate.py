"""Unit tests for the Client aggregate."""

from datetime import date

import pytest

from clients.domain.aggregates import Client, ClientDetails
from clients.domain.events import (
    EVENT_SOURCE,
    ClientCreated,
    ClientDeleted,
    ClientUpdated,
)
from clients.domain.value_objects import ClientStatus


def make_details(**overrides) -> ClientDetails:
    values = {
        "company_name": "Atlas Logistics",
        "country": "Morocco",
        "ice_number": "001234567000089",
        "rc_number": "rc12345",
        "fiscal_year_end": date(2025, 12, 31),
    }
    values.update(overrides)
    return ClientDetails(**values)


class TestClientDetails:
    def test_identifiers_are_normalized(self):
        details = make_details(ice_number=" 001234567000089 ", vat_number="  ")

        assert details.ice_number == "001234567000089"
        assert details.rc_number == "RC12345"
        assert details.vat_number is None

    def test_identifiers_lists_only_present_values_in_check_order(self):
        details = make_details(cnss_number="12345678")

        assert list(details.identifiers().items()) == [
            ("ice_number", "001234567000089"),
            ("rc_number", "RC12345"),
            ("cnss_number", "12345678"),
        ]

    def test_snapshot_uses_wire_values(self):
        snapshot = make_details(status=ClientStatus.SUSPENDED).snapshot()

        assert snapshot.status == "Suspended"
        assert snapshot.fiscal_year_end == "2025-12-31"
        assert snapshot.company_name == "Atlas Logistics"


class TestClientCreate:
    def test_create_records_client_created(self):
        client = Client.create("tenant-a", make_details(), actor="alice")

        events = client.collect_events()
        assert len(events) == 1
        event = events[0]
        assert isinstance(event, ClientCreated)
        assert event.client_id == client.id.value
        assert event.tenant_id == "tenant-a"
        assert event.created_by == "alice"
        assert event.client.company_name == "Atlas Logistics"
        assert event.source == EVENT_SOURCE
        assert event.correlation_id

    def test_new_client_is_live_and_active(self):
        client = Client.create("tenant-a", make_details(), actor="alice")

        assert client.is_deleted is False
        assert client.status is ClientStatus.ACTIVE

    def test_collect_events_clears_pending(self):
        client = Client.create("tenant-a", make_details(), actor="alice")
        client.collect_events()

        assert client.collect_events() == []


class TestClientUpdate:
    def test_update_replaces_every_field(self):
        client = Client.create("tenant-a", make_details(), actor="alice")
        client.collect_events()

        client.update(ClientDetails(company_name="Atlas Group"), actor="bob")

        assert client.details.company_name == "Atlas Group"
        assert client.details.ice_number is None
        assert client.details.country is None

    def test_update_records_client_updated(self):
        client = Client.create("tenant-a", make_details(), actor="alice")
        client.collect_events()

        client.update(make_details(industry="Transport"), actor="bob")

        [event] = client.collect_events()
        assert isinstance(event, ClientUpdated)
        assert event.updated_by == "bob"
        assert event.client.industry == "Transport"

    def test_status_can_move_between_any_values(self):
        client = Client.create("tenant-a", make_details(), actor="alice")

        client.update(make_details(status=ClientStatus.SUSPENDED), actor="bob")
        client.update(make_details(status=ClientStatus.INACTIVE), actor="bob")
        client.update(make_details(status=ClientStatus.ACTIVE), actor="bob")

        assert client.status is ClientStatus.ACTIVE

    def test_deleted_client_cannot_be_updated(self):
        client = Client.create("tenant-a", make_details(), actor="alice")
        client.mark_for_deletion("alice")

        with pytest.raises(ValueError, match="deleted"):
            client.update(make_details(), actor="bob")


class TestClientDeletion:
    def test_mark_for_deletion_records_who_and_when(self):
        client = Client.create("tenant-a", make_details(), actor="alice")
        client.collect_events()

        client.mark_for_deletion("carol")

        assert client.is_deleted is True
        assert client.deleted_by == "carol"
        assert client.deleted_at is not None
        [event] = client.collect_events()
        assert isinstance(event, ClientDeleted)
        assert event.deleted_by == "carol"
        assert event.deleted_at == client.deleted_at

    def test_cannot_delete_twice(self):
        client = Client.create("tenant-a", make_details(), actor="alice")
        client.mark_for_deletion("carol")

        with pytest.raises(ValueError, match="already deleted"):
            client.mark_for_deletion("carol")
