"""In-process fan-out of invalidation signals.

The broadcaster keeps, per tenant, the set of local subscribers (for
example open server-sent event streams) and hands each signal to every
subscriber of that tenant. Each subscriber owns a bounded queue; when a
slow subscriber's queue is full, its oldest signal is dropped so the
newest one is always delivered.

The broadcaster runs on the event loop and is not thread-safe.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from shared_kernel.invalidation.observability import (
    DefaultInvalidationProbe,
    InvalidationProbe,
)
from shared_kernel.invalidation.value_objects import InvalidationSignal


class InvalidationSubscription:
    """A single subscriber's view of one tenant's signals."""

    def __init__(self, tenant_id: str, max_queue_size: int) -> None:
        self.tenant_id = tenant_id
        self._queue: asyncio.Queue[InvalidationSignal] = asyncio.Queue(
            maxsize=max_queue_size
        )

    def offer(self, signal: InvalidationSignal) -> bool:
        """Enqueue a signal, dropping the oldest one if the queue is full.

        Returns:
            True if an older signal was dropped to make room
        """
        dropped = False
        if self._queue.full():
            self._queue.get_nowait()
            dropped = True
        self._queue.put_nowait(signal)
        return dropped

    async def get(self) -> InvalidationSignal:
        """Wait for the next signal."""
        return await self._queue.get()

    def pending(self) -> int:
        return self._queue.qsize()

    def __aiter__(self) -> InvalidationSubscription:
        return self

    async def __anext__(self) -> InvalidationSignal:
        return await self.get()


class InvalidationBroadcaster:
    """Fans invalidation signals out to local per-tenant subscribers."""

    def __init__(
        self,
        max_queue_size: int = 100,
        probe: InvalidationProbe | None = None,
    ) -> None:
        if max_queue_size < 1:
            raise ValueError("max_queue_size must be at least 1")
        self._max_queue_size = max_queue_size
        self._probe = probe or DefaultInvalidationProbe()
        self._subscribers: dict[str, set[InvalidationSubscription]] = {}

    def subscribe(self, tenant_id: str) -> InvalidationSubscription:
        """Register a new subscriber for a tenant's signals."""
        subscription = InvalidationSubscription(tenant_id, self._max_queue_size)
        subscribers = self._subscribers.setdefault(tenant_id, set())
        subscribers.add(subscription)
        self._probe.subscriber_added(tenant_id, total=len(subscribers))
        return subscription

    def unsubscribe(self, subscription: InvalidationSubscription) -> None:
        """Remove a subscriber. Unknown subscriptions are ignored."""
        subscribers = self._subscribers.get(subscription.tenant_id)
        if subscribers is None or subscription not in subscribers:
            return
        subscribers.discard(subscription)
        if not subscribers:
            del self._subscribers[subscription.tenant_id]
        self._probe.subscriber_removed(
            subscription.tenant_id, total=len(subscribers)
        )

    @asynccontextmanager
    async def subscription(
        self, tenant_id: str
    ) -> AsyncIterator[InvalidationSubscription]:
        """Subscribe for the duration of an ``async with`` block."""
        subscription = self.subscribe(tenant_id)
        try:
            yield subscription
        finally:
            self.unsubscribe(subscription)

    def dispatch(self, signal: InvalidationSignal) -> int:
        """Hand a signal to every subscriber of its tenant.

        Returns:
            Number of subscribers the signal was delivered to
        """
        subscribers = list(self._subscribers.get(signal.tenant_id, ()))
        for subscription in subscribers:
            if subscription.offer(signal):
                self._probe.signal_dropped(signal.tenant_id, signal.scope.value)
        self._probe.signal_dispatched(
            signal.tenant_id, signal.scope.value, subscribers=len(subscribers)
        )
        return len(subscribers)

    def subscriber_count(self, tenant_id: str) -> int:
        return len(self._subscribers.get(tenant_id, ()))
