"""create shifts and shift_templates tables

Shifts of one membership may not overlap. The rule is an exclusion
constraint over tstzrange(starts_at, ends_at), which needs btree_gist for
the equality part on membership_id. Ranges are half-open, so a shift may
start exactly when the previous one ends.

Revision ID: e3d9b41f7a62
Revises: c57a91e4b8f2
Create Date: 2026-10-19 09:12:40.318226

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "e3d9b41f7a62"
down_revision: Union[str, Sequence[str], None] = "c57a91e4b8f2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    op.create_table(
        "shifts",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("membership_id", sa.String(length=26), nullable=False),
        sa.Column("location_id", sa.String(length=26), nullable=True),
        sa.Column("starts_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ends_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_shifts"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_shifts_tenant_id_tenants",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["membership_id"],
            ["memberships.id"],
            name="fk_shifts_membership_id_memberships",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["location_id"],
            ["locations.id"],
            name="fk_shifts_location_id_locations",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint("ends_at > starts_at", name="ck_shifts_ends_after_start"),
    )
    op.create_index("ix_shifts_tenant_id", "shifts", ["tenant_id"])
    op.create_index(
        "ix_shifts_tenant_id_starts_at", "shifts", ["tenant_id", "starts_at"]
    )
    op.execute(
        "ALTER TABLE shifts ADD CONSTRAINT ex_shifts_membership_id_during "
        "EXCLUDE USING gist "
        "(membership_id WITH =, tstzrange(starts_at, ends_at) WITH &&)"
    )

    op.create_table(
        "shift_templates",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("role_id", sa.String(length=26), nullable=True),
        sa.Column("location_id", sa.String(length=26), nullable=True),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_shift_templates"),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name="fk_shift_templates_tenant_id_tenants",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["roles.id"],
            name="fk_shift_templates_role_id_roles",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["location_id"],
            ["locations.id"],
            name="fk_shift_templates_location_id_locations",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_shift_templates_tenant_id", "shift_templates", ["tenant_id"])


def downgrade() -> None:
    """Downgrade schema.

    btree_gist is left installed; other schemas may rely on it.
    """
    op.drop_index("ix_shift_templates_tenant_id", table_name="shift_templates")
    op.drop_table("shift_templates")
    op.drop_index("ix_shifts_tenant_id_starts_at", table_name="shifts")
    op.drop_index("ix_shifts_tenant_id", table_name="shifts")
    op.drop_table("shifts")
