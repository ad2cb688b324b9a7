"""Pydantic models for client group API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from clients.domain.aggregates import ClientGroup
from clients.domain.value_objects import Page


class GroupFields(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Group name")
    description: str | None = Field(default=None, max_length=500)
    tenant_id: str | None = Field(
        default=None,
        description="Tenant; falls back to the X-Tenant-ID header",
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name cannot be blank")
        return value.strip()


class CreateGroupRequest(GroupFields):
    """Request model for creating a group."""

    created_by: str | None = None


class UpdateGroupRequest(GroupFields):
    """Request model for renaming a group or changing its description."""

    updated_by: str | None = None


class GroupResponse(BaseModel):
    """Response model for a client group."""

    id: str = Field(..., description="Group ID (ULID format)")
    tenant_id: str
    name: str
    description: str | None
    is_deleted: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, group: ClientGroup) -> GroupResponse:
        """Convert domain ClientGroup aggregate to API response."""
        return cls(
            id=group.id.value,
            tenant_id=group.tenant_id,
            name=group.name,
            description=group.description,
            is_deleted=group.is_deleted,
            created_at=group.created_at,
            updated_at=group.updated_at,
        )


class GroupListResponse(BaseModel):
    """One page of groups."""

    items: list[GroupResponse]
    total_count: int
    page: int
    page_size: int

    @classmethod
    def from_page(cls, page: Page[ClientGroup]) -> GroupListResponse:
        return cls(
            items=[GroupResponse.from_domain(group) for group in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
        )
