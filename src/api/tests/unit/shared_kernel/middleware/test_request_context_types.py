"""Unit tests for the request context value objects and RequestContextProbe.

Tests the pure value objects from the shared kernel and the domain probe
default implementation.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from shared_kernel.middleware import RequestContext, TenantContext, TenantSource
from shared_kernel.middleware.observability import DefaultRequestContextProbe
from shared_kernel.observability_context import ObservationContext


class TestTenantContext:
    """Tests for the TenantContext value object."""

    def test_tenant_context_is_immutable(self) -> None:
        context = TenantContext(tenant_id="acme", source=TenantSource.HEADER)
        with pytest.raises(AttributeError):
            context.tenant_id = "something-else"  # type: ignore[misc]

    def test_equality_includes_source(self) -> None:
        a = TenantContext(tenant_id="acme", source=TenantSource.HEADER)
        b = TenantContext(tenant_id="acme", source=TenantSource.HEADER)
        c = TenantContext(tenant_id="acme", source=TenantSource.DEFAULT)
        assert a == b
        assert a != c

    def test_source_values(self) -> None:
        assert {s.value for s in TenantSource} == {"request", "header", "default"}


class TestRequestContext:
    def test_exposes_tenant_id(self) -> None:
        context = RequestContext(
            tenant=TenantContext(tenant_id="acme", source=TenantSource.REQUEST),
            actor=None,
            request_id="req-1",
        )
        assert context.tenant_id == "acme"
        assert context.actor is None


class TestDefaultRequestContextProbe:
    """Tests for the DefaultRequestContextProbe implementation."""

    def test_with_context_returns_new_instance(self) -> None:
        probe = DefaultRequestContextProbe()
        context = ObservationContext(request_id="req-123", user_id="user-456")

        new_probe = probe.with_context(context)

        assert new_probe is not probe
        assert isinstance(new_probe, DefaultRequestContextProbe)

    def test_bound_context_is_logged(self) -> None:
        logger = MagicMock()
        probe = DefaultRequestContextProbe(logger=logger).with_context(
            ObservationContext(request_id="req-1")
        )

        probe.tenant_resolved("acme", source="header")

        logger.debug.assert_called_once_with(
            "tenant_context_resolved",
            tenant_id="acme",
            source="header",
            request_id="req-1",
        )

    def test_probe_methods_do_not_raise(self) -> None:
        probe = DefaultRequestContextProbe()

        probe.tenant_resolved("t1", source="request")
        probe.tenant_missing()
        probe.actor_resolved("alice", source="x-user-id")
        probe.gateway_claims_unreadable(ValueError("bad token"))
