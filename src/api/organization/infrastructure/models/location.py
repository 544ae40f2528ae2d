"""SQLAlchemy ORM model for the locations table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin


class LocationModel(Base, TenantScopedMixin, TimestampMixin):
    """ORM model for locations table."""

    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return (
            f"<LocationModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"name={self.name})>"
        )
