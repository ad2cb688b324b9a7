"""Client service dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clients.application.observability import (
    ClientServiceProbe,
    DefaultClientServiceProbe,
)
from clients.application.services import ClientService
from clients.dependencies.messaging import get_event_publisher
from clients.dependencies.request_context import get_request_actor
from clients.infrastructure.client_repository import ClientRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.messaging import IEventPublisher


def get_client_service_probe() -> ClientServiceProbe:
    """Get ClientServiceProbe instance.

    Returns:
        DefaultClientServiceProbe instance for observability
    """
    return DefaultClientServiceProbe()


def get_client_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> ClientRepository:
    """Get ClientRepository instance.

    Args:
        session: Async database session

    Returns:
        ClientRepository instance
    """
    return ClientRepository(session=session)


def get_client_service(
    client_repo: Annotated[ClientRepository, Depends(get_client_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    publisher: Annotated[IEventPublisher, Depends(get_event_publisher)],
    actor: Annotated[str | None, Depends(get_request_actor)],
    probe: Annotated[ClientServiceProbe, Depends(get_client_service_probe)],
) -> ClientService:
    """Get ClientService instance.

    Args:
        client_repo: Client repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        publisher: Event publisher for domain events
        actor: Actor identity carried by the request
        probe: Client service probe for observability

    Returns:
        ClientService instance
    """
    return ClientService(
        session=session,
        client_repository=client_repo,
        publisher=publisher,
        actor=actor,
        probe=probe,
    )
