"""SQLAlchemy ORM models for client groups and their memberships."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    SoftDeleteMixin,
    TimestampMixin,
    utc_now,
)


class ClientGroupModel(Base, TimestampMixin, SoftDeleteMixin):
    """ORM model for the client_groups table.

    Group names are unique per tenant among live groups (partial index).
    """

    __tablename__ = "client_groups"
    __table_args__ = (
        Index(
            "uq_client_groups_tenant_name",
            "tenant_id",
            "name",
            unique=True,
            postgresql_where=text("is_deleted = false"),
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500))

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ClientGroupModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"name={self.name})>"
        )


class ClientGroupMembershipModel(Base):
    """ORM model for the client_group_memberships join table.

    The composite primary key allows one row per (client, group) pair.
    Rows cascade away if either parent row is ever removed.
    """

    __tablename__ = "client_group_memberships"

    client_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("clients.id", ondelete="CASCADE"),
        primary_key=True,
    )
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("client_groups.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        nullable=False,
    )
    added_by: Mapped[str | None] = mapped_column(String(255))

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ClientGroupMembershipModel(client_id={self.client_id}, "
            f"group_id={self.group_id})>"
        )
