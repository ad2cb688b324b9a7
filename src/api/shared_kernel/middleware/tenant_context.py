"""Tenant and request context value objects.

This module contains the pure value objects that represent a resolved
tenant and actor for the current request. They are framework-agnostic
and contain no business logic, making them safe for the shared kernel.

The actual resolution logic (request field, header extraction, gateway
claims, development defaults) lives in the bounded context's dependency
layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TenantSource(StrEnum):
    """How the tenant for a request was resolved."""

    REQUEST = "request"
    HEADER = "header"
    DEFAULT = "default"


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: The tenant identifier as a string.
        source: How the tenant was resolved.
    """

    tenant_id: str
    source: TenantSource


@dataclass(frozen=True)
class RequestContext:
    """Tenant and actor resolved for a single request.

    The application core only ever sees these resolved strings, never
    the transport types they were read from.

    Attributes:
        tenant: The resolved tenant context.
        actor: The resolved caller identity, or None when anonymous.
        request_id: Correlates log entries for this request.
    """

    tenant: TenantContext
    actor: str | None
    request_id: str

    @property
    def tenant_id(self) -> str:
        return self.tenant.tenant_id
