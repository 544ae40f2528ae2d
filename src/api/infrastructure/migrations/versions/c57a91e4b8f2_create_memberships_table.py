"""create memberships table

A principal belongs to a tenant at most once. Deleting the tenant or the
user removes the membership; deleting a role only detaches it.

Revision ID: c57a91e4b8f2
Revises: 8b4e0d6c2f31
Create Date: 2026-09-28 10:31:05.447561

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "c57a91e4b8f2"
down_revision: Union[str, Sequence[str], None] = "8b4e0d6c2f31"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "memberships",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("principal_id", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("role_id", sa.String(length=26), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_memberships"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_memberships_tenant_id_tenants",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["principal_id"],
            ["users.id"],
            name="fk_memberships_principal_id_users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["roles.id"],
            name="fk_memberships_role_id_roles",
            ondelete="SET NULL",
        ),
        sa.UniqueConstraint(
            "tenant_id",
            "principal_id",
            name="uq_memberships_tenant_id_principal_id",
        ),
    )
    op.create_index("ix_memberships_tenant_id", "memberships", ["tenant_id"])
    # Serves the per-request "tenants of this principal" lookup
    op.create_index(
        "ix_memberships_principal_id_created_at",
        "memberships",
        ["principal_id", "created_at", "id"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_memberships_principal_id_created_at", table_name="memberships")
    op.drop_index("ix_memberships_tenant_id", table_name="memberships")
    op.drop_table("memberships")
