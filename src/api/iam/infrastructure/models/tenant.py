"""SQLAlchemy ORM model for the tenants table.

Tenants represent companies and are the top-level isolation boundary.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    Note: Tenant names are not unique. Deleting a row cascades to every
    tenant-scoped table through its foreign key.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, name={self.name})>"
