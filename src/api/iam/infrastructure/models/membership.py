"""SQLAlchemy ORM model for the memberships table.

A membership row is the only evidence that a principal belongs to a
tenant.
"""

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin


class MembershipModel(Base, TenantScopedMixin, TimestampMixin):
    """ORM model for memberships table.

    Each principal has at most one membership per tenant. The optional
    role reference is cleared when the role is deleted.
    """

    __tablename__ = "memberships"
    __table_args__ = (
        UniqueConstraint("tenant_id", "principal_id"),
        Index(
            "ix_memberships_principal_id_created_at",
            "principal_id",
            "created_at",
            "id",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    principal_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<MembershipModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"principal_id={self.principal_id})>"
        )
