"""PostgreSQL NOTIFY-based invalidation publisher.

Issues ``pg_notify`` on the caller's session. PostgreSQL holds
notifications raised inside a transaction until it commits and discards
them on rollback, so a signal is delivered exactly when the mutation
that caused it becomes visible.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from shared_kernel.invalidation import (
    DefaultInvalidationProbe,
    InvalidationProbe,
    InvalidationScope,
    InvalidationSignal,
    TenantInvalidationPublisher,
)

_NOTIFY = text("SELECT pg_notify(:channel, :payload)")


class PostgresNotifyInvalidationPublisher(TenantInvalidationPublisher):
    """Publishes invalidation signals through PostgreSQL NOTIFY."""

    def __init__(
        self,
        session: AsyncSession,
        channel: str = "tenant_invalidations",
        probe: InvalidationProbe | None = None,
    ) -> None:
        """Initialize the publisher.

        Args:
            session: The session whose transaction carries the mutation
            channel: NOTIFY channel name (default: "tenant_invalidations")
            probe: Optional observability probe
        """
        self._session = session
        self._channel = channel
        self._probe = probe or DefaultInvalidationProbe()

    async def publish(self, tenant_id: str, scope: InvalidationScope) -> None:
        """Queue a notification in the current transaction."""
        signal = InvalidationSignal(tenant_id=tenant_id, scope=scope)
        await self._session.execute(
            _NOTIFY, {"channel": self._channel, "payload": signal.to_payload()}
        )
        self._probe.signal_published(tenant_id, scope.value)
