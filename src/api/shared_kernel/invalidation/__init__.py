"""Tenant-scoped invalidation signalling shared across bounded contexts."""

from shared_kernel.invalidation.broadcaster import (
    InvalidationBroadcaster,
    InvalidationSubscription,
)
from shared_kernel.invalidation.observability import (
    DefaultInvalidationListenerProbe,
    DefaultInvalidationProbe,
    InvalidationListenerProbe,
    InvalidationProbe,
)
from shared_kernel.invalidation.ports import TenantInvalidationPublisher
from shared_kernel.invalidation.value_objects import (
    InvalidationScope,
    InvalidationSignal,
    InvalidSignalPayloadError,
)

__all__ = [
    "DefaultInvalidationListenerProbe",
    "DefaultInvalidationProbe",
    "InvalidSignalPayloadError",
    "InvalidationBroadcaster",
    "InvalidationListenerProbe",
    "InvalidationProbe",
    "InvalidationScope",
    "InvalidationSignal",
    "InvalidationSubscription",
    "TenantInvalidationPublisher",
]
