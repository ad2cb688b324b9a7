"""Application services for the Client Management bounded context.

Application services orchestrate domain aggregates, repositories and the
message bus to fulfill use cases. They are the "front door" to the
context; the facade never touches repositories directly.
"""

from clients.application.services.client_group_service import ClientGroupService
from clients.application.services.client_service import ClientService
from clients.application.services.user_client_association_service import (
    UserClientAssociationService,
)

__all__ = [
    "ClientService",
    "ClientGroupService",
    "UserClientAssociationService",
]
