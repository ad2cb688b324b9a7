"""create client management tables

Revision ID: 3f9a1c7d2b4e
Revises:
Create Date: 2026-03-02 10:14:27.518204

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f9a1c7d2b4e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_IDENTIFIER_COLUMNS = ("ice_number", "rc_number", "vat_number", "cnss_number")


def _soft_delete_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "is_deleted", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.String(length=255), nullable=True),
    ]


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "clients",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=100), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("ice_number", sa.String(length=15), nullable=True),
        sa.Column("rc_number", sa.String(length=20), nullable=True),
        sa.Column("vat_number", sa.String(length=15), nullable=True),
        sa.Column("cnss_number", sa.String(length=10), nullable=True),
        sa.Column("industry", sa.String(length=100), nullable=True),
        sa.Column("admin_contact_person", sa.String(length=255), nullable=True),
        sa.Column("billing_contact_person", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("fiscal_year_end", sa.Date(), nullable=True),
        sa.Column("assigned_team_id", sa.String(length=100), nullable=True),
        *_timestamp_columns(),
        *_soft_delete_columns(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_clients")),
    )
    op.create_index(
        op.f("ix_clients_tenant_id"), "clients", ["tenant_id"], unique=False
    )
    # Identifiers are unique per tenant among live clients only
    for column in _IDENTIFIER_COLUMNS:
        op.create_index(
            f"uq_clients_tenant_{column}",
            "clients",
            ["tenant_id", column],
            unique=True,
            postgresql_where=sa.text(
                f"is_deleted = false AND {column} IS NOT NULL"
            ),
        )
    op.create_index(
        "ix_clients_tenant_live_company_name",
        "clients",
        ["tenant_id", "company_name"],
        unique=False,
        postgresql_where=sa.text("is_deleted = false"),
    )

    op.create_table(
        "client_groups",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        *_timestamp_columns(),
        *_soft_delete_columns(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_client_groups")),
    )
    op.create_index(
        op.f("ix_client_groups_tenant_id"),
        "client_groups",
        ["tenant_id"],
        unique=False,
    )
    op.create_index(
        "uq_client_groups_tenant_name",
        "client_groups",
        ["tenant_id", "name"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )

    op.create_table(
        "client_group_memberships",
        sa.Column("client_id", sa.String(length=26), nullable=False),
        sa.Column("group_id", sa.String(length=26), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("added_by", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(
            ["client_id"],
            ["clients.id"],
            name=op.f("fk_client_group_memberships_client_id_clients"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["group_id"],
            ["client_groups.id"],
            name=op.f("fk_client_group_memberships_group_id_client_groups"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "client_id", "group_id", name=op.f("pk_client_group_memberships")
        ),
    )
    op.create_index(
        op.f("ix_client_group_memberships_group_id"),
        "client_group_memberships",
        ["group_id"],
        unique=False,
    )

    op.create_table(
        "user_client_associations",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("client_id", sa.String(length=26), nullable=False),
        sa.Column("tenant_id", sa.String(length=100), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("assigned_by", sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(
            ["client_id"],
            ["clients.id"],
            name=op.f("fk_user_client_associations_client_id_clients"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_user_client_associations")),
        sa.UniqueConstraint(
            "tenant_id",
            "user_id",
            "client_id",
            name="uq_user_client_associations_tenant_user_client",
        ),
    )
    for column in ("user_id", "client_id", "tenant_id"):
        op.create_index(
            op.f(f"ix_user_client_associations_{column}"),
            "user_client_associations",
            [column],
            unique=False,
        )


def downgrade() -> None:
    """Downgrade schema."""
    for column in ("tenant_id", "client_id", "user_id"):
        op.drop_index(
            op.f(f"ix_user_client_associations_{column}"),
            table_name="user_client_associations",
        )
    op.drop_table("user_client_associations")
    op.drop_index(
        op.f("ix_client_group_memberships_group_id"),
        table_name="client_group_memberships",
    )
    op.drop_table("client_group_memberships")
    op.drop_index("uq_client_groups_tenant_name", table_name="client_groups")
    op.drop_index(op.f("ix_client_groups_tenant_id"), table_name="client_groups")
    op.drop_table("client_groups")
    op.drop_index("ix_clients_tenant_live_company_name", table_name="clients")
    for column in _IDENTIFIER_COLUMNS:
        op.drop_index(f"uq_clients_tenant_{column}", table_name="clients")
    op.drop_index(op.f("ix_clients_tenant_id"), table_name="clients")
    op.drop_table("clients")
