"""SQLAlchemy ORM models for the shifts and shift_templates tables."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin

# Created by migration; the ORM does not model exclusion constraints.
SHIFT_OVERLAP_CONSTRAINT = "ex_shifts_membership_id_during"


class ShiftModel(Base, TenantScopedMixin, TimestampMixin):
    """ORM model for shifts table.

    Shifts of one membership never overlap: the migration adds the
    exclusion constraint ``SHIFT_OVERLAP_CONSTRAINT`` over
    ``tstzrange(starts_at, ends_at)``. Removing the membership removes its
    shifts; removing the location only detaches it.
    """

    __tablename__ = "shifts"
    __table_args__ = (
        CheckConstraint("ends_at > starts_at", name="ck_shifts_ends_after_start"),
        Index("ix_shifts_tenant_id_starts_at", "tenant_id", "starts_at"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    membership_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("memberships.id", ondelete="CASCADE"),
        nullable=False,
    )
    location_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
    )
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ends_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<ShiftModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"membership_id={self.membership_id}, starts_at={self.starts_at})>"
        )


class ShiftTemplateModel(Base, TenantScopedMixin, TimestampMixin):
    """ORM model for shift_templates table."""

    __tablename__ = "shift_templates"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
    )
    location_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
    )
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ShiftTemplateModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"name={self.name})>"
        )
