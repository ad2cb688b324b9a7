"""Port for the external identity service."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IIdentityService(Protocol):
    """Answers whether a user exists in the identity service.

    Users are owned by the identity service; this context only stores
    their ids on associations.
    """

    async def user_exists(self, user_id: str, tenant_id: str) -> bool:
        """Return True if the user is known in the tenant."""
        ...
