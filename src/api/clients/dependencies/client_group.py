"""Client group service dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clients.application.observability import (
    ClientGroupServiceProbe,
    DefaultClientGroupServiceProbe,
)
from clients.application.services import ClientGroupService
from clients.dependencies.client import get_client_repository
from clients.dependencies.messaging import get_event_publisher
from clients.dependencies.request_context import get_request_actor
from clients.infrastructure.client_group_repository import ClientGroupRepository
from clients.infrastructure.client_repository import ClientRepository
from infrastructure.database.dependencies import get_write_session
from shared_kernel.messaging import IEventPublisher


def get_client_group_service_probe() -> ClientGroupServiceProbe:
    """Get ClientGroupServiceProbe instance."""
    return DefaultClientGroupServiceProbe()


def get_client_group_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> ClientGroupRepository:
    """Get ClientGroupRepository instance."""
    return ClientGroupRepository(session=session)


def get_client_group_service(
    group_repo: Annotated[ClientGroupRepository, Depends(get_client_group_repository)],
    client_repo: Annotated[ClientRepository, Depends(get_client_repository)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    publisher: Annotated[IEventPublisher, Depends(get_event_publisher)],
    actor: Annotated[str | None, Depends(get_request_actor)],
    probe: Annotated[
        ClientGroupServiceProbe, Depends(get_client_group_service_probe)
    ],
) -> ClientGroupService:
    """Get ClientGroupService instance.

    Both repositories share the request's session through FastAPI
    dependency caching, so membership checks and writes run in one
    transaction.
    """
    return ClientGroupService(
        session=session,
        group_repository=group_repo,
        client_repository=client_repo,
        publisher=publisher,
        actor=actor,
        probe=probe,
    )
