"""HTTP routes for client management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from clients.application.services import ClientGroupService, ClientService
from clients.dependencies.client import get_client_service
from clients.dependencies.client_group import get_client_group_service
from clients.dependencies.request_context import (
    RequestContextResolver,
    get_request_context,
    get_request_context_resolver,
)
from clients.domain.value_objects import ClientId, DuplicateValue
from clients.presentation.clients.models import (
    ClientListResponse,
    ClientResponse,
    CreateClientRequest,
    UpdateClientRequest,
)
from clients.presentation.common import (
    ActionResponse,
    parse_id,
    raise_conflict,
    raise_internal_error,
    raise_not_found,
)
from clients.presentation.groups.models import GroupResponse
from clients.presentation.observability import ApiProbe, bind_request, get_api_probe
from shared_kernel.middleware import RequestContext

router = APIRouter(
    prefix="/clients",
    tags=["clients"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ClientResponse,
    responses={
        400: {"description": "Invalid field"},
        401: {"description": "Tenant required"},
        409: {"description": "Business identifier already used in tenant"},
        500: {"description": "Internal server error"},
    },
)
async def create_client(
    body: CreateClientRequest,
    resolver: Annotated[RequestContextResolver, Depends(get_request_context_resolver)],
    service: Annotated[ClientService, Depends(get_client_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> ClientResponse:
    """Create a client.

    Raises:
        HTTPException: 409 if ICE, RC, VAT or CNSS is already used by a
            live client of the tenant
    """
    context = resolver.resolve(body.tenant_id)
    probe = bind_request(api_probe, context)
    probe.operation_started("create_client")

    try:
        result = await service.create_client(
            tenant_id=context.tenant_id,
            details=body.to_details(),
            actor=body.created_by,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        probe.operation_failed("create_client", e)
        raise_internal_error("create client")

    if isinstance(result, DuplicateValue):
        raise_conflict(result)
    return ClientResponse.from_domain(result)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientService, Depends(get_client_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    page: Annotated[int | None, Query()] = None,
    page_size: Annotated[int | None, Query()] = None,
    search_term: Annotated[str | None, Query()] = None,
) -> ClientListResponse:
    """List the tenant's clients.

    Page numbers below 1 become 1; page sizes below 1 become 20 and sizes
    above 100 are capped at 100.
    """
    probe = bind_request(api_probe, context)
    probe.operation_started("list_clients")

    try:
        result = await service.list_clients(
            tenant_id=context.tenant_id,
            page=page,
            page_size=page_size,
            search_term=search_term,
        )
    except Exception as e:
        probe.operation_failed("list_clients", e)
        raise_internal_error("list clients")

    return ClientListResponse.from_page(result)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientService, Depends(get_client_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> ClientResponse:
    """Get a client of the tenant by ID."""
    client_id_obj = parse_id(ClientId, client_id, "client")
    probe = bind_request(api_probe, context)
    probe.operation_started("get_client", client_id=client_id)

    try:
        client = await service.get_client(client_id_obj, context.tenant_id)
    except Exception as e:
        probe.operation_failed("get_client", e)
        raise_internal_error("retrieve client")

    if client is None:
        raise_not_found("Client")
    return ClientResponse.from_domain(client)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    body: UpdateClientRequest,
    resolver: Annotated[RequestContextResolver, Depends(get_request_context_resolver)],
    service: Annotated[ClientService, Depends(get_client_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> ClientResponse:
    """Replace every editable field of a client."""
    client_id_obj = parse_id(ClientId, client_id, "client")
    context = resolver.resolve(body.tenant_id)
    probe = bind_request(api_probe, context)
    probe.operation_started("update_client", client_id=client_id)

    try:
        result = await service.update_client(
            client_id=client_id_obj,
            tenant_id=context.tenant_id,
            details=body.to_details(),
            actor=body.updated_by,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        probe.operation_failed("update_client", e)
        raise_internal_error("update client")

    if result is None:
        raise_not_found("Client")
    if isinstance(result, DuplicateValue):
        raise_conflict(result)
    return ClientResponse.from_domain(result)


@router.delete("/{client_id}", response_model=ActionResponse)
async def delete_client(
    client_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientService, Depends(get_client_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    deleted_by: Annotated[str | None, Query()] = None,
) -> ActionResponse:
    """Soft-delete a client."""
    client_id_obj = parse_id(ClientId, client_id, "client")
    probe = bind_request(api_probe, context)
    probe.operation_started("delete_client", client_id=client_id)

    try:
        deleted = await service.delete_client(
            client_id=client_id_obj,
            tenant_id=context.tenant_id,
            actor=deleted_by,
        )
    except Exception as e:
        probe.operation_failed("delete_client", e)
        raise_internal_error("delete client")

    if not deleted:
        raise_not_found("Client")
    return ActionResponse(success=True, message="Client deleted")


@router.get("/{client_id}/groups", response_model=list[GroupResponse])
async def get_client_groups(
    client_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> list[GroupResponse]:
    """Live groups the client belongs to."""
    client_id_obj = parse_id(ClientId, client_id, "client")
    probe = bind_request(api_probe, context)
    probe.operation_started("get_client_groups", client_id=client_id)

    try:
        groups = await service.get_client_groups(client_id_obj, context.tenant_id)
    except Exception as e:
        probe.operation_failed("get_client_groups", e)
        raise_internal_error("list client groups")

    return [GroupResponse.from_domain(group) for group in groups]
