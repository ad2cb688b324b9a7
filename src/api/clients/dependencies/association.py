"""User-client association service dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clients.application.observability import (
    DefaultUserClientAssociationServiceProbe,
    UserClientAssociationServiceProbe,
)
from clients.application.services import UserClientAssociationService
from clients.dependencies.client import get_client_repository
from clients.dependencies.messaging import get_event_publisher
from clients.dependencies.request_context import get_request_actor
from clients.infrastructure.client_repository import ClientRepository
from clients.infrastructure.identity_service import PermissiveIdentityService
from clients.infrastructure.user_client_association_repository import (
    UserClientAssociationRepository,
)
from clients.ports.identity import IIdentityService
from infrastructure.database.dependencies import get_write_session
from shared_kernel.messaging import IEventPublisher


def get_association_service_probe() -> UserClientAssociationServiceProbe:
    """Get UserClientAssociationServiceProbe instance."""
    return DefaultUserClientAssociationServiceProbe()


def get_identity_service() -> IIdentityService:
    """Get the identity service adapter."""
    return PermissiveIdentityService()


def get_association_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> UserClientAssociationRepository:
    """Get UserClientAssociationRepository instance."""
    return UserClientAssociationRepository(session=session)


def get_association_service(
    association_repo: Annotated[
        UserClientAssociationRepository, Depends(get_association_repository)
    ],
    client_repo: Annotated[ClientRepository, Depends(get_client_repository)],
    identity_service: Annotated[IIdentityService, Depends(get_identity_service)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    publisher: Annotated[IEventPublisher, Depends(get_event_publisher)],
    actor: Annotated[str | None, Depends(get_request_actor)],
    probe: Annotated[
        UserClientAssociationServiceProbe, Depends(get_association_service_probe)
    ],
) -> UserClientAssociationService:
    """Get UserClientAssociationService instance."""
    return UserClientAssociationService(
        session=session,
        association_repository=association_repo,
        client_repository=client_repo,
        identity_service=identity_service,
        publisher=publisher,
        actor=actor,
        probe=probe,
    )
