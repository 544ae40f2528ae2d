"""Protocols (ports) for tenant-scoped invalidation.

Bounded contexts publish invalidations through this port after mutating
tenant data. The infrastructure layer decides how the signal travels.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.invalidation.value_objects import InvalidationScope


@runtime_checkable
class TenantInvalidationPublisher(Protocol):
    """Publishes invalidation signals for a tenant.

    Implementations bound to a database session must only deliver the
    signal once the surrounding transaction commits. A mutation that rolls
    back must not produce a signal.
    """

    async def publish(self, tenant_id: str, scope: InvalidationScope) -> None:
        """Announce that data of the given scope changed for the tenant.

        Args:
            tenant_id: Tenant whose data changed
            scope: Which kind of data changed
        """
        ...
