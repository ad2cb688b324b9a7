"""Pydantic models for user-client association requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from clients.domain.aggregates import UserClientAssociation
from clients.domain.value_objects import Page


class AssignUserRequest(BaseModel):
    """Request model for assigning a user to a client."""

    user_id: str = Field(..., min_length=1, description="Identity service user id")
    tenant_id: str | None = Field(
        default=None,
        description="Tenant; falls back to the X-Tenant-ID header",
    )
    assigned_by: str | None = None

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("user_id cannot be blank")
        return value.strip()


class AssignUserResponse(BaseModel):
    success: bool
    association_id: str


class RemoveUserResponse(BaseModel):
    success: bool


class AssociationResponse(BaseModel):
    """Response model for a user-client association."""

    id: str
    user_id: str
    client_id: str
    tenant_id: str
    assigned_at: datetime
    assigned_by: str

    @classmethod
    def from_domain(cls, association: UserClientAssociation) -> AssociationResponse:
        return cls(
            id=association.id.value,
            user_id=association.user_id,
            client_id=association.client_id.value,
            tenant_id=association.tenant_id,
            assigned_at=association.assigned_at,
            assigned_by=association.assigned_by,
        )


class AssociationListResponse(BaseModel):
    """One page of associations."""

    items: list[AssociationResponse]
    total_count: int
    page: int
    page_size: int

    @classmethod
    def from_page(
        cls, page: Page[UserClientAssociation]
    ) -> AssociationListResponse:
        return cls(
            items=[AssociationResponse.from_domain(a) for a in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
        )
