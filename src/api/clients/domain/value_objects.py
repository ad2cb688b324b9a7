"""Value objects for the Client Management domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, Self, TypeVar

from ulid import ULID

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

SYSTEM_ACTOR = "System"
"""Actor recorded when neither the caller nor the request identifies one."""

T = TypeVar("T")


@dataclass(frozen=True)
class _UlidId:
    """Base for ULID-backed aggregate identifiers.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from its string value.

        Args:
            value: ULID string

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class ClientId(_UlidId):
    """Identifier for a Client aggregate."""


@dataclass(frozen=True)
class ClientGroupId(_UlidId):
    """Identifier for a ClientGroup aggregate."""


@dataclass(frozen=True)
class AssociationId(_UlidId):
    """Identifier for a UserClientAssociation aggregate."""


def new_correlation_id() -> str:
    """Correlation id for a freshly started operation."""
    return str(ULID())


class ClientStatus(StrEnum):
    """Lifecycle status of a client.

    Every transition between the three members is permitted; the only
    rule is that the value is one of them.
    """

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"

    @classmethod
    def parse(cls, value: str) -> ClientStatus:
        """Parse a status name, case-insensitively.

        Raises:
            ValueError: If the value is not a recognized status
        """
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(
            f"Invalid ClientStatus: {value!r}, expected one of "
            f"{', '.join(m.value for m in cls)}"
        )


@dataclass(frozen=True)
class Pagination:
    """Normalized page request.

    Use ``Pagination.of`` to build one from raw caller input: page numbers
    below 1 become 1, page sizes below 1 fall back to the default and page
    sizes above the maximum are clamped.
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def of(cls, page: int | None, page_size: int | None) -> Pagination:
        if page is None or page < 1:
            page = 1
        if page_size is None or page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        elif page_size > MAX_PAGE_SIZE:
            page_size = MAX_PAGE_SIZE
        return cls(page=page, page_size=page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing plus the total for page-count computation."""

    items: list[T]
    total_count: int
    pagination: Pagination

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def page_size(self) -> int:
        return self.pagination.page_size


@dataclass(frozen=True)
class DuplicateValue:
    """Result returned when a unique field already holds the value in the tenant.

    Attributes:
        field: Name of the conflicting field (e.g. "ice_number", "name")
        value: The conflicting value
    """

    field: str
    value: str


def resolve_actor(explicit: str | None, ambient: str | None = None) -> str:
    """Pick the actor for audit fields.

    An explicit caller-supplied value wins, then the identity resolved from
    the request, then the system sentinel. Never returns a blank string.
    """
    for candidate in (explicit, ambient):
        if candidate is not None and candidate.strip():
            return candidate.strip()
    return SYSTEM_ACTOR
