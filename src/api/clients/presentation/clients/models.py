"""Pydantic models for client API requests and responses."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from clients.domain.aggregates import Client, ClientDetails
from clients.domain.validation import (
    is_valid_cnss,
    is_valid_ice,
    is_valid_rc,
    is_valid_vat,
    normalize_identifier,
)
from clients.domain.value_objects import ClientStatus, Page

_IDENTIFIER_CHECKS = {
    "ice_number": (is_valid_ice, "ICE number must be exactly 15 digits"),
    "rc_number": (is_valid_rc, "RC number must be 4 to 20 characters with a digit"),
    "vat_number": (is_valid_vat, "VAT number must be 8 to 15 characters, 8 digits"),
    "cnss_number": (is_valid_cnss, "CNSS number must be 8 to 10 digits"),
}


class ClientFields(BaseModel):
    """Editable client fields shared by create and update.

    Blank identifiers are treated as absent. Present identifiers must be
    well formed.
    """

    company_name: str = Field(..., min_length=1, max_length=255)
    country: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=500)
    ice_number: str | None = Field(default=None, description="15-digit ICE")
    rc_number: str | None = Field(default=None, description="Commercial register")
    vat_number: str | None = Field(default=None, description="Fiscal identifier")
    cnss_number: str | None = Field(default=None, description="CNSS affiliation")
    industry: str | None = Field(default=None, max_length=100)
    admin_contact_person: str | None = Field(default=None, max_length=255)
    billing_contact_person: str | None = Field(default=None, max_length=255)
    status: ClientStatus = Field(
        default=ClientStatus.ACTIVE,
        description="Active, Inactive or Suspended",
    )
    fiscal_year_end: date | None = None
    assigned_team_id: str | None = Field(default=None, max_length=100)
    tenant_id: str | None = Field(
        default=None,
        description="Tenant; falls back to the X-Tenant-ID header",
    )

    @field_validator("company_name")
    @classmethod
    def company_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("company_name cannot be blank")
        return value.strip()

    @field_validator("ice_number", "rc_number", "vat_number", "cnss_number")
    @classmethod
    def identifier_well_formed(
        cls, value: str | None, info: ValidationInfo
    ) -> str | None:
        normalized = normalize_identifier(value)
        if normalized is None:
            return None
        check, message = _IDENTIFIER_CHECKS[info.field_name]
        if not check(normalized):
            raise ValueError(message)
        return normalized

    @field_validator("status", mode="before")
    @classmethod
    def status_known(cls, value: Any) -> Any:
        if value is None:
            return ClientStatus.ACTIVE
        if isinstance(value, str):
            return ClientStatus.parse(value)
        return value

    def to_details(self) -> ClientDetails:
        return ClientDetails(
            company_name=self.company_name,
            country=self.country,
            address=self.address,
            ice_number=self.ice_number,
            rc_number=self.rc_number,
            vat_number=self.vat_number,
            cnss_number=self.cnss_number,
            industry=self.industry,
            admin_contact_person=self.admin_contact_person,
            billing_contact_person=self.billing_contact_person,
            status=self.status,
            fiscal_year_end=self.fiscal_year_end,
            assigned_team_id=self.assigned_team_id,
        )


class CreateClientRequest(ClientFields):
    """Request model for creating a client."""

    created_by: str | None = Field(
        default=None, description="Actor; falls back to the request identity"
    )


class UpdateClientRequest(ClientFields):
    """Request model for replacing every editable field of a client."""

    updated_by: str | None = Field(
        default=None, description="Actor; falls back to the request identity"
    )


class ClientResponse(BaseModel):
    """Response model for a client."""

    id: str = Field(..., description="Client ID (ULID format)")
    tenant_id: str
    company_name: str
    country: str | None
    address: str | None
    ice_number: str | None
    rc_number: str | None
    vat_number: str | None
    cnss_number: str | None
    industry: str | None
    admin_contact_person: str | None
    billing_contact_person: str | None
    status: ClientStatus
    fiscal_year_end: date | None
    assigned_team_id: str | None
    is_deleted: bool
    deleted_at: datetime | None
    deleted_by: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, client: Client) -> ClientResponse:
        """Convert domain Client aggregate to API response."""
        details = client.details
        return cls(
            id=client.id.value,
            tenant_id=client.tenant_id,
            company_name=details.company_name,
            country=details.country,
            address=details.address,
            ice_number=details.ice_number,
            rc_number=details.rc_number,
            vat_number=details.vat_number,
            cnss_number=details.cnss_number,
            industry=details.industry,
            admin_contact_person=details.admin_contact_person,
            billing_contact_person=details.billing_contact_person,
            status=details.status,
            fiscal_year_end=details.fiscal_year_end,
            assigned_team_id=details.assigned_team_id,
            is_deleted=client.is_deleted,
            deleted_at=client.deleted_at,
            deleted_by=client.deleted_by,
            created_at=client.created_at,
            updated_at=client.updated_at,
        )


class ClientListResponse(BaseModel):
    """One page of clients."""

    items: list[ClientResponse]
    total_count: int
    page: int
    page_size: int

    @classmethod
    def from_page(cls, page: Page[Client]) -> ClientListResponse:
        return cls(
            items=[ClientResponse.from_domain(client) for client in page.items],
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
        )
