"""Database infrastructure - engines, sessions and ORM base."""

from infrastructure.database.models import Base, TenantScopedMixin, TimestampMixin

__all__ = [
    "Base",
    "TenantScopedMixin",
    "TimestampMixin",
]
