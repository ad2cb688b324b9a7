"""Shared middleware for cross-cutting concerns.

This module contains the request context value objects and the user
context capability shared across bounded contexts. The transport-specific
resolution (headers, gateway claims) lives in each context's dependency
layer.
"""

from shared_kernel.middleware.tenant_context import (
    RequestContext,
    TenantContext,
    TenantSource,
)
from shared_kernel.middleware.user_context import IUserContext

__all__ = [
    "IUserContext",
    "RequestContext",
    "TenantContext",
    "TenantSource",
]
