"""SQLAlchemy ORM model for the roles table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin


class RoleModel(Base, TenantScopedMixin, TimestampMixin):
    """ORM model for roles table.

    Memberships reference roles with ON DELETE SET NULL.
    """

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<RoleModel(id={self.id}, tenant_id={self.tenant_id}, name={self.name})>"
