"""User context capability implemented once per transport adapter."""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

RequestT_contra = TypeVar("RequestT_contra", contravariant=True)


@runtime_checkable
class IUserContext(Protocol[RequestT_contra]):
    """Resolves the caller's identity and tenant from a transport request.

    Implementations read whatever the transport carries (metadata headers,
    verified gateway claims) and return plain strings, or None when the
    request does not carry the value. Fallbacks such as development
    defaults are applied by the implementation, never by the caller.
    """

    def resolve_actor_identity(self, request: RequestT_contra) -> str | None:
        """Return the caller identity for audit fields, if any."""
        ...

    def resolve_tenant_id(self, request: RequestT_contra) -> str | None:
        """Return the tenant identifier carried by the request, if any."""
        ...
