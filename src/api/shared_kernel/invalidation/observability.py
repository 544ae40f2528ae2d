"""Observability probes for invalidation signalling.

Following Domain Oriented Observability, probes capture domain-significant
events without cluttering the broadcaster and listener with logging.
"""

from __future__ import annotations

from typing import Protocol

import structlog

logger = structlog.get_logger()


class InvalidationProbe(Protocol):
    """Protocol for publisher and broadcaster observability."""

    def signal_published(self, tenant_id: str, scope: str) -> None:
        """Called when a signal is queued for delivery."""
        ...

    def signal_dispatched(self, tenant_id: str, scope: str, subscribers: int) -> None:
        """Called when a signal is handed to local subscribers."""
        ...

    def signal_dropped(self, tenant_id: str, scope: str) -> None:
        """Called when a full subscriber queue drops its oldest signal."""
        ...

    def subscriber_added(self, tenant_id: str, total: int) -> None:
        """Called when a subscriber starts listening for a tenant."""
        ...

    def subscriber_removed(self, tenant_id: str, total: int) -> None:
        """Called when a subscriber stops listening for a tenant."""
        ...


class DefaultInvalidationProbe:
    """Default implementation using structlog."""

    def __init__(self) -> None:
        self._log = logger.bind(component="invalidation")

    def signal_published(self, tenant_id: str, scope: str) -> None:
        self._log.debug("invalidation_published", tenant_id=tenant_id, scope=scope)

    def signal_dispatched(self, tenant_id: str, scope: str, subscribers: int) -> None:
        self._log.debug(
            "invalidation_dispatched",
            tenant_id=tenant_id,
            scope=scope,
            subscribers=subscribers,
        )

    def signal_dropped(self, tenant_id: str, scope: str) -> None:
        self._log.warning("invalidation_dropped", tenant_id=tenant_id, scope=scope)

    def subscriber_added(self, tenant_id: str, total: int) -> None:
        self._log.debug("invalidation_subscriber_added", tenant_id=tenant_id, total=total)

    def subscriber_removed(self, tenant_id: str, total: int) -> None:
        self._log.debug(
            "invalidation_subscriber_removed", tenant_id=tenant_id, total=total
        )


class InvalidationListenerProbe(Protocol):
    """Protocol for notification listener observability."""

    def listener_started(self, channel: str) -> None:
        """Called when the listener starts."""
        ...

    def listener_stopped(self) -> None:
        """Called when the listener stops."""
        ...

    def notification_received(self, tenant_id: str, scope: str) -> None:
        """Called when a valid notification is received."""
        ...

    def invalid_notification_ignored(self, payload: str, reason: str) -> None:
        """Called when a malformed notification is ignored."""
        ...

    def listener_error(self, error: str) -> None:
        """Called when the listen loop fails."""
        ...


class DefaultInvalidationListenerProbe:
    """Default implementation using structlog."""

    def __init__(self) -> None:
        self._log = logger.bind(component="invalidation_listener")

    def listener_started(self, channel: str) -> None:
        """Log listener start."""
        self._log.info("invalidation_listener_started", channel=channel)

    def listener_stopped(self) -> None:
        """Log listener stop."""
        self._log.info("invalidation_listener_stopped")

    def notification_received(self, tenant_id: str, scope: str) -> None:
        """Log notification received."""
        self._log.debug(
            "invalidation_notification_received", tenant_id=tenant_id, scope=scope
        )

    def invalid_notification_ignored(self, payload: str, reason: str) -> None:
        """Log malformed notification."""
        self._log.warning(
            "invalid_invalidation_notification_ignored",
            payload=payload,
            reason=reason,
        )

    def listener_error(self, error: str) -> None:
        """Log listener error."""
        self._log.error("invalidation_listener_error", error=error)
