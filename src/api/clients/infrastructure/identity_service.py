"""Identity service adapter.

The identity service owns user records. Until it exposes a lookup API
this adapter accepts every non-blank user id, so assignment only checks
the client side.
"""

from __future__ import annotations

import structlog

from clients.ports.identity import IIdentityService

logger = structlog.get_logger()


class PermissiveIdentityService(IIdentityService):
    """Treats every non-blank user id as an existing user."""

    async def user_exists(self, user_id: str, tenant_id: str) -> bool:
        exists = bool(user_id.strip())
        if not exists:
            logger.debug("identity_user_id_blank", tenant_id=tenant_id)
        return exists
