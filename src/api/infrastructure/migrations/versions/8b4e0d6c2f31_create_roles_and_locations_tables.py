"""create roles and locations tables

Revision ID: 8b4e0d6c2f31
Revises: 3f1c2a9b7d10
Create Date: 2026-09-28 10:19:47.902114

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8b4e0d6c2f31"
down_revision: Union[str, Sequence[str], None] = "3f1c2a9b7d10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _tenant_scoped_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=f"pk_{name}"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name=f"fk_{name}_tenant_id_tenants",
            ondelete="CASCADE",
        ),
    )
    op.create_index(f"ix_{name}_tenant_id", name, ["tenant_id"])


def upgrade() -> None:
    """Upgrade schema."""
    _tenant_scoped_table("roles")
    _tenant_scoped_table("locations")


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_locations_tenant_id", table_name="locations")
    op.drop_table("locations")
    op.drop_index("ix_roles_tenant_id", table_name="roles")
    op.drop_table("roles")
