"""Invalidation signal transport over PostgreSQL LISTEN/NOTIFY."""

from infrastructure.invalidation.listener import PostgresNotifyInvalidationListener
from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher

__all__ = [
    "PostgresNotifyInvalidationListener",
    "PostgresNotifyInvalidationPublisher",
]
