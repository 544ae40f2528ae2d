"""Invalidation dependency providers for FastAPI."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher
from infrastructure.settings import get_tenancy_settings
from shared_kernel.invalidation import InvalidationBroadcaster


@lru_cache
def get_invalidation_broadcaster() -> InvalidationBroadcaster:
    """Get the process-wide broadcaster shared by the listener and streams."""
    return InvalidationBroadcaster()


def get_invalidation_publisher(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> PostgresNotifyInvalidationPublisher:
    """Get a publisher bound to the request's write session."""
    return PostgresNotifyInvalidationPublisher(
        session=session,
        channel=get_tenancy_settings().invalidation_channel,
    )
