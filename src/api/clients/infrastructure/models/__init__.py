"""SQLAlchemy ORM models for the Client Management bounded context.

These models map to database tables and are used by repository implementations.
"""

from clients.infrastructure.models.client import ClientModel
from clients.infrastructure.models.client_group import (
    ClientGroupMembershipModel,
    ClientGroupModel,
)
from clients.infrastructure.models.user_client_association import (
    UserClientAssociationModel,
)

__all__ = [
    "ClientGroupMembershipModel",
    "ClientGroupModel",
    "ClientModel",
    "UserClientAssociationModel",
]
