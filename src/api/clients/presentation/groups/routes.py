"""HTTP routes for client groups and memberships."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from clients.application.services import ClientGroupService
from clients.dependencies.client_group import get_client_group_service
from clients.dependencies.request_context import (
    RequestContextResolver,
    get_request_context,
    get_request_context_resolver,
)
from clients.domain.value_objects import ClientGroupId, ClientId, DuplicateValue
from clients.presentation.clients.models import ClientResponse
from clients.presentation.common import (
    ActionResponse,
    parse_id,
    raise_conflict,
    raise_internal_error,
    raise_not_found,
)
from clients.presentation.groups.models import (
    CreateGroupRequest,
    GroupListResponse,
    GroupResponse,
    UpdateGroupRequest,
)
from clients.presentation.observability import ApiProbe, bind_request, get_api_probe
from shared_kernel.middleware import RequestContext

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=GroupResponse,
    responses={
        400: {"description": "Invalid name"},
        409: {"description": "Group name already used in tenant"},
    },
)
async def create_group(
    body: CreateGroupRequest,
    resolver: Annotated[RequestContextResolver, Depends(get_request_context_resolver)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> GroupResponse:
    """Create a client group.

    Raises:
        HTTPException: 409 if a live group of the tenant has the same name
    """
    context = resolver.resolve(body.tenant_id)
    probe = bind_request(api_probe, context)
    probe.operation_started("create_group")

    try:
        result = await service.create_group(
            tenant_id=context.tenant_id,
            name=body.name,
            description=body.description,
            actor=body.created_by,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        probe.operation_failed("create_group", e)
        raise_internal_error("create group")

    if isinstance(result, DuplicateValue):
        raise_conflict(result)
    return GroupResponse.from_domain(result)


@router.get("", response_model=GroupListResponse)
async def list_groups(
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    page: Annotated[int | None, Query()] = None,
    page_size: Annotated[int | None, Query()] = None,
    search_term: Annotated[str | None, Query()] = None,
) -> GroupListResponse:
    probe = bind_request(api_probe, context)
    probe.operation_started("list_groups")

    try:
        result = await service.list_groups(
            tenant_id=context.tenant_id,
            page=page,
            page_size=page_size,
            search_term=search_term,
        )
    except Exception as e:
        probe.operation_failed("list_groups", e)
        raise_internal_error("list groups")

    return GroupListResponse.from_page(result)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(
    group_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> GroupResponse:
    group_id_obj = parse_id(ClientGroupId, group_id, "group")
    probe = bind_request(api_probe, context)
    probe.operation_started("get_group", group_id=group_id)

    try:
        group = await service.get_group(group_id_obj, context.tenant_id)
    except Exception as e:
        probe.operation_failed("get_group", e)
        raise_internal_error("retrieve group")

    if group is None:
        raise_not_found("Group")
    return GroupResponse.from_domain(group)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: str,
    body: UpdateGroupRequest,
    resolver: Annotated[RequestContextResolver, Depends(get_request_context_resolver)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> GroupResponse:
    """Rename a group or change its description."""
    group_id_obj = parse_id(ClientGroupId, group_id, "group")
    context = resolver.resolve(body.tenant_id)
    probe = bind_request(api_probe, context)
    probe.operation_started("update_group", group_id=group_id)

    try:
        result = await service.update_group(
            group_id=group_id_obj,
            tenant_id=context.tenant_id,
            name=body.name,
            description=body.description,
            actor=body.updated_by,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        probe.operation_failed("update_group", e)
        raise_internal_error("update group")

    if result is None:
        raise_not_found("Group")
    if isinstance(result, DuplicateValue):
        raise_conflict(result)
    return GroupResponse.from_domain(result)


@router.delete("/{group_id}", response_model=ActionResponse)
async def delete_group(
    group_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    deleted_by: Annotated[str | None, Query()] = None,
) -> ActionResponse:
    """Soft-delete a group. Its memberships are kept."""
    group_id_obj = parse_id(ClientGroupId, group_id, "group")
    probe = bind_request(api_probe, context)
    probe.operation_started("delete_group", group_id=group_id)

    try:
        deleted = await service.delete_group(
            group_id=group_id_obj,
            tenant_id=context.tenant_id,
            actor=deleted_by,
        )
    except Exception as e:
        probe.operation_failed("delete_group", e)
        raise_internal_error("delete group")

    if not deleted:
        raise_not_found("Group")
    return ActionResponse(success=True, message="Group deleted")


@router.get("/{group_id}/clients", response_model=list[ClientResponse])
async def get_group_clients(
    group_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
) -> list[ClientResponse]:
    """Live clients that are members of the group."""
    group_id_obj = parse_id(ClientGroupId, group_id, "group")
    probe = bind_request(api_probe, context)
    probe.operation_started("get_group_clients", group_id=group_id)

    try:
        clients = await service.get_group_clients(group_id_obj, context.tenant_id)
    except Exception as e:
        probe.operation_failed("get_group_clients", e)
        raise_internal_error("list group clients")

    return [ClientResponse.from_domain(client) for client in clients]


@router.post("/{group_id}/clients/{client_id}", response_model=ActionResponse)
async def add_client_to_group(
    group_id: str,
    client_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    added_by: Annotated[str | None, Query()] = None,
) -> ActionResponse:
    """Add a client to a group. Adding an existing member succeeds."""
    group_id_obj = parse_id(ClientGroupId, group_id, "group")
    client_id_obj = parse_id(ClientId, client_id, "client")
    probe = bind_request(api_probe, context)
    probe.operation_started(
        "add_client_to_group", group_id=group_id, client_id=client_id
    )

    try:
        added = await service.add_client_to_group(
            group_id=group_id_obj,
            client_id=client_id_obj,
            tenant_id=context.tenant_id,
            actor=added_by,
        )
    except Exception as e:
        probe.operation_failed("add_client_to_group", e)
        raise_internal_error("add client to group")

    if not added:
        raise_not_found("Group or client")
    return ActionResponse(success=True, message="Client added to group")


@router.delete("/{group_id}/clients/{client_id}", response_model=ActionResponse)
async def remove_client_from_group(
    group_id: str,
    client_id: str,
    context: Annotated[RequestContext, Depends(get_request_context)],
    service: Annotated[ClientGroupService, Depends(get_client_group_service)],
    api_probe: Annotated[ApiProbe, Depends(get_api_probe)],
    removed_by: Annotated[str | None, Query()] = None,
) -> ActionResponse:
    group_id_obj = parse_id(ClientGroupId, group_id, "group")
    client_id_obj = parse_id(ClientId, client_id, "client")
    probe = bind_request(api_probe, context)
    probe.operation_started(
        "remove_client_from_group", group_id=group_id, client_id=client_id
    )

    try:
        removed = await service.remove_client_from_group(
            group_id=group_id_obj,
            client_id=client_id_obj,
            tenant_id=context.tenant_id,
            actor=removed_by,
        )
    except Exception as e:
        probe.operation_failed("remove_client_from_group", e)
        raise_internal_error("remove client from group")

    if not removed:
        raise_not_found("Membership")
    return ActionResponse(success=True, message="Client removed from group")
