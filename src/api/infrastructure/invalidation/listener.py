"""PostgreSQL NOTIFY listener for invalidation signals.

Listens on the invalidation channel and hands every well-formed signal to
the in-process broadcaster. Uses asyncpg-listen for reliable connection
handling and automatic reconnection.
"""

from __future__ import annotations

import asyncio

from asyncpg_listen import (
    ListenPolicy,
    NotificationListener,
    NotificationOrTimeout,
    Timeout,
    connect_func,
)

from shared_kernel.invalidation import (
    DefaultInvalidationListenerProbe,
    InvalidationBroadcaster,
    InvalidationListenerProbe,
    InvalidationSignal,
    InvalidSignalPayloadError,
)


class PostgresNotifyInvalidationListener:
    """Forwards NOTIFY payloads from PostgreSQL to the broadcaster.

    Delivery is best-effort: notifications sent while the listener is
    reconnecting are lost. Subscribers that need certainty refetch on
    reconnect.
    """

    def __init__(
        self,
        db_url: str,
        broadcaster: InvalidationBroadcaster,
        channel: str = "tenant_invalidations",
        probe: InvalidationListenerProbe | None = None,
    ) -> None:
        """Initialize the listener.

        Args:
            db_url: PostgreSQL connection URL (plain postgresql:// scheme)
            broadcaster: In-process fan-out target
            channel: NOTIFY channel name (default: "tenant_invalidations")
            probe: Optional observability probe
        """
        self._db_url = db_url
        self._broadcaster = broadcaster
        self._channel = channel
        self._probe = probe or DefaultInvalidationListenerProbe()
        self._running = False
        self._listener: NotificationListener | None = None
        self._listener_task: asyncio.Task[None] | None = None

    async def handle_notification(self, notification: NotificationOrTimeout) -> None:
        """Dispatch a single notification."""
        if not self._running:
            return

        # asyncpg-listen sends Timeout when nothing arrived within the period
        if isinstance(notification, Timeout):
            return

        if not notification.payload:
            self._probe.invalid_notification_ignored("", "Empty payload")
            return

        try:
            signal = InvalidationSignal.from_payload(notification.payload)
        except InvalidSignalPayloadError as e:
            self._probe.invalid_notification_ignored(notification.payload, str(e))
            return

        self._probe.notification_received(signal.tenant_id, signal.scope.value)
        self._broadcaster.dispatch(signal)

    async def start(self) -> None:
        """Listen until stop() is called or the listen loop fails."""
        self._running = True

        try:
            self._listener = NotificationListener(connect_func(self._db_url))
            self._probe.listener_started(self._channel)

            self._listener_task = asyncio.create_task(
                self._listener.run(
                    {self._channel: self.handle_notification},
                    policy=ListenPolicy.ALL,
                )
            )
            await self._listener_task
        except asyncio.CancelledError:
            # Cancelled via stop()
            pass
        except Exception as e:
            self._probe.listener_error(str(e))

    async def stop(self) -> None:
        """Stop listening and clean up."""
        self._running = False

        if self._listener_task and not self._listener_task.done():
            self._listener_task.cancel()
            try:
                await self._listener_task
            except asyncio.CancelledError:
                pass

        self._probe.listener_stopped()
