"""Models and helpers shared by all facade routes."""

from __future__ import annotations

from typing import NoReturn, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel, Field

from clients.domain.value_objects import DuplicateValue

IdT = TypeVar("IdT")


class ActionResponse(BaseModel):
    """Outcome of a delete or membership operation."""

    success: bool = Field(..., description="Whether the operation took effect")
    message: str = Field(..., description="Human readable outcome")


def parse_id(parser: type[IdT], value: str, label: str) -> IdT:
    """Parse a path identifier.

    Raises:
        HTTPException 400: If the value is not a valid identifier
    """
    try:
        return parser.from_string(value)  # type: ignore[attr-defined]
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} ID format",
        )


def raise_not_found(label: str) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{label} not found",
    )


def raise_conflict(duplicate: DuplicateValue) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"{duplicate.field} '{duplicate.value}' already exists",
    )


def raise_internal_error(action: str) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
