"""SQLAlchemy ORM model for the users table.

Mirrors principals of the external identity provider. Rows are created
just in time, the first time a principal is seen on an authenticated
request, so memberships can reference them.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class PrincipalModel(Base, TimestampMixin):
    """ORM model for users table (identity provider mirror).

    Note: id is VARCHAR(255) to accommodate opaque provider subjects.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PrincipalModel(id={self.id}, email={self.email})>"
