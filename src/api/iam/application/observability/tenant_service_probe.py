"""Protocol for tenant application service observability.

Defines the interface for domain probes that capture application-level
domain events for tenant lifecycle operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantServiceProbe(Protocol):
    """Domain probe for tenant application service operations."""

    def tenant_created(self, tenant_id: str, name: str, principal_id: str) -> None:
        """Record that a tenant was created with its first member."""
        ...

    def tenants_listed(self, principal_id: str, count: int) -> None:
        """Record that a principal's tenants were listed."""
        ...

    def tenant_deleted(self, tenant_id: str, principal_id: str) -> None:
        """Record that a tenant was deleted."""
        ...

    def tenant_limit_reached(self, principal_id: str, limit: int) -> None:
        """Record that a principal hit the tenant creation cap."""
        ...

    def tenant_access_denied(self, tenant_id: str, principal_id: str) -> None:
        """Record that a principal acted on a tenant they do not belong to."""
        ...

    def with_context(self, context: ObservationContext) -> TenantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantServiceProbe:
    """Default implementation of TenantServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantServiceProbe(logger=self._logger, context=context)

    def tenant_created(self, tenant_id: str, name: str, principal_id: str) -> None:
        """Record that a tenant was created with its first member."""
        self._logger.info(
            "tenant_created",
            tenant_id=tenant_id,
            name=name,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, principal_id: str, count: int) -> None:
        """Record that a principal's tenants were listed."""
        self._logger.debug(
            "tenants_listed",
            principal_id=principal_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def tenant_deleted(self, tenant_id: str, principal_id: str) -> None:
        """Record that a tenant was deleted."""
        self._logger.info(
            "tenant_deleted",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def tenant_limit_reached(self, principal_id: str, limit: int) -> None:
        """Record that a principal hit the tenant creation cap."""
        self._logger.info(
            "tenant_limit_reached",
            principal_id=principal_id,
            limit=limit,
            **self._get_context_kwargs(),
        )

    def tenant_access_denied(self, tenant_id: str, principal_id: str) -> None:
        """Record that a principal acted on a tenant they do not belong to."""
        self._logger.warning(
            "tenant_access_denied",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
