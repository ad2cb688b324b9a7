"""Aggregates for the Client Management bounded context."""

from clients.domain.aggregates.client import Client, ClientDetails
from clients.domain.aggregates.client_group import (
    DEFAULT_CLIENT_GROUPS,
    ClientGroup,
    ClientGroupMembership,
)
from clients.domain.aggregates.user_client_association import (
    UserClientAssociation,
)

__all__ = [
    "DEFAULT_CLIENT_GROUPS",
    "Client",
    "ClientDetails",
    "ClientGroup",
    "ClientGroupMembership",
    "UserClientAssociation",
]
