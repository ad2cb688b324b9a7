"""HTTP routes for assigning users to clients."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from clients.application.services import UserClientAssociationService
from clients.dependencies.association import get_association_service
from clients.dependencies.request_context import (
    RequestContextResolver,
    get_request_context,
    get_request_context_resolver,
)
from clients.domain.value_objects import ClientId
from clients.presentation.associations.models import (
    AssignUserRequest,
    AssignUserResponse,
    AssociationListResponse,
    RemoveUserResponse,
)
from clients.presentation.common import parse_id, raise_internal_error, raise_not_found
from clients.presentation.observability import ApiProbe, bind_request, get_api_probe
from shared_kernel.middleware import RequestContext

router = APIRouter(tags=["associations"])


@router.post(
    "/clients/{client_id}/users",
    status_code=status.HTTP_201_CREATED,
    response_model=AssignUserResponse,
    responses={404: {"description": "Client or user not found"}},
)
async def assign_user_to_client(
    client_id: str,
    body: AssignUserRequest,
    resolver: Annotated[RequestContextResolver, Depends(get_request_context_resolver)],
    service: Annotated[
        UserClientAssociationService, Depends(get_association_service)
    ],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> AssignUserResponse:
    """Assign a user to a client.

    Assigning an already assigned user returns the existing association.
    """
    client_id_obj = parse_id(ClientId, client_id, "client")
    context = resolver.resolve(body.tenant_id)
    probe = bind_request(api_probe, context)
    probe.operation_started(
        "assign_user_to_client", client_id=client_id, user_id=body.user_id
    )

    try:
        association = await service.assign_user_to_client(
            client_id=client_id_obj,
            user_id=body.user_id,
            tenant_id=context.tenant_id,
            actor=body.assigned_by,
        )
    except Exception as e:
        probe.operation_failed("assign_user_to_client", e)
        raise_internal_error("assign user to client")

    if association is None:
        raise_not_found("Client or user")
    return AssignUserResponse(success=True, association_id=association.id.value)


@router.delete(
    "/clients/{client_id}/users/{user_id}", response_model=RemoveUserResponse
)
async def remove_user_from_client(
    client_id: str,
    user_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[
        UserClientAssociationService, Depends(get_association_service)
    ],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    removed_by: Annotated[str | None, Query()] = None,
) -> RemoveUserResponse:
    client_id_obj = parse_id(ClientId, client_id, "client")
    probe = bind_request(api_probe, context)
    probe.operation_started(
        "remove_user_from_client", client_id=client_id, user_id=user_id
    )

    try:
        removed = await service.remove_user_from_client(
            client_id=client_id_obj,
            user_id=user_id,
            tenant_id=context.tenant_id,
            actor=removed_by,
        )
    except Exception as e:
        probe.operation_failed("remove_user_from_client", e)
        raise_internal_error("remove user from client")

    if not removed:
        raise_not_found("Association")
    return RemoveUserResponse(success=True)


@router.get("/clients/{client_id}/users", response_model=AssociationListResponse)
async def get_client_users(
    client_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[
        UserClientAssociationService, Depends(get_association_service)
    ],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    page: Annotated[int | None, Query()] = None,
    page_size: Annotated[int | None, Query()] = None,
) -> AssociationListResponse:
    """Users assigned to a client."""
    client_id_obj = parse_id(ClientId, client_id, "client")
    probe = bind_request(api_probe, context)
    probe.operation_started("get_client_users", client_id=client_id)

    try:
        result = await service.get_client_users(
            client_id_obj, context.tenant_id, page=page, page_size=page_size
        )
    except Exception as e:
        probe.operation_failed("get_client_users", e)
        raise_internal_error("list client users")

    return AssociationListResponse.from_page(result)


@router.get("/users/{user_id}/clients", response_model=AssociationListResponse)
async def get_user_clients(
    user_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[
        UserClientAssociationService, Depends(get_association_service)
    ],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    page: Annotated[int | None, Query()] = None,
    page_size: Annotated[int | None, Query()] = None,
) -> AssociationListResponse:
    """Clients a user is assigned to."""
    probe = bind_request(api_probe, context)
    probe.operation_started("get_user_clients", user_id=user_id)

    try:
        result = await service.get_user_clients(
            user_id, context.tenant_id, page=page, page_size=page_size
        )
    except Exception as e:
        probe.operation_failed("get_user_clients", e)
        raise_internal_error("list user clients")

    return AssociationListResponse.from_page(result)
