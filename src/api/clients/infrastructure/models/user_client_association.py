"""SQLAlchemy ORM model for the user_client_associations table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, utc_now


class UserClientAssociationModel(Base):
    """ORM model for user-client assignments.

    ``user_id`` is an identity-service id and has no local foreign key.
    """

    __tablename__ = "user_client_associations"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id",
            "user_id",
            "client_id",
            name="uq_user_client_associations_tenant_user_client",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    client_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tenant_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        nullable=False,
    )
    assigned_by: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<UserClientAssociationModel(id={self.id}, user_id={self.user_id}, "
            f"client_id={self.client_id})>"
        )
