"""SQLAlchemy ORM model for the clients table."""

from datetime import date

from sqlalchemy import Date, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, SoftDeleteMixin, TimestampMixin

_LIVE = text("is_deleted = false")


def _unique_live_identifier(column: str) -> Index:
    # Blank identifiers are stored as NULL and never conflict
    return Index(
        f"uq_clients_tenant_{column}",
        "tenant_id",
        column,
        unique=True,
        postgresql_where=text(f"is_deleted = false AND {column} IS NOT NULL"),
    )


class ClientModel(Base, TimestampMixin, SoftDeleteMixin):
    """ORM model for the clients table.

    Each business identifier is unique per tenant among live rows through
    a partial unique index, mirroring the application-level check so two
    concurrent creates cannot both succeed.
    """

    __tablename__ = "clients"
    __table_args__ = (
        _unique_live_identifier("ice_number"),
        _unique_live_identifier("rc_number"),
        _unique_live_identifier("vat_number"),
        _unique_live_identifier("cnss_number"),
        Index(
            "ix_clients_tenant_live_company_name",
            "tenant_id",
            "company_name",
            postgresql_where=_LIVE,
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str | None] = mapped_column(String(100))
    address: Mapped[str | None] = mapped_column(String(500))
    ice_number: Mapped[str | None] = mapped_column(String(15))
    rc_number: Mapped[str | None] = mapped_column(String(20))
    vat_number: Mapped[str | None] = mapped_column(String(15))
    cnss_number: Mapped[str | None] = mapped_column(String(10))
    industry: Mapped[str | None] = mapped_column(String(100))
    admin_contact_person: Mapped[str | None] = mapped_column(String(255))
    billing_contact_person: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    fiscal_year_end: Mapped[date | None] = mapped_column(Date)
    assigned_team_id: Mapped[str | None] = mapped_column(String(100))

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ClientModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"company_name={self.company_name}, is_deleted={self.is_deleted})>"
        )
