"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to tenant, membership and principal
repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: str) -> None:
        """Record that a tenant was successfully saved."""
        ...

    def tenant_retrieved(self, tenant_id: str) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenant_deleted(self, tenant_id: str) -> None:
        """Record that a tenant was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_saved(self, tenant_id: str) -> None:
        self._logger.info(
            "tenant_saved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: str) -> None:
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_deleted(self, tenant_id: str) -> None:
        self._logger.info(
            "tenant_deleted",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )


class MembershipRepositoryProbe(Protocol):
    """Domain probe for membership repository operations."""

    def membership_saved(self, membership_id: str, tenant_id: str) -> None:
        """Record that a membership was saved."""
        ...

    def membership_deleted(self, membership_id: str, tenant_id: str) -> None:
        """Record that a membership was deleted."""
        ...

    def membership_not_found(self, membership_id: str, tenant_id: str) -> None:
        """Record a lookup of a membership outside the tenant or missing."""
        ...

    def memberships_listed(self, principal_id: str, count: int) -> None:
        """Record that a principal's memberships were listed."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMembershipRepositoryProbe:
    """Default implementation of MembershipRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMembershipRepositoryProbe:
        return DefaultMembershipRepositoryProbe(logger=self._logger, context=context)

    def membership_saved(self, membership_id: str, tenant_id: str) -> None:
        self._logger.info(
            "membership_saved",
            membership_id=membership_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def membership_deleted(self, membership_id: str, tenant_id: str) -> None:
        self._logger.info(
            "membership_deleted",
            membership_id=membership_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def membership_not_found(self, membership_id: str, tenant_id: str) -> None:
        self._logger.debug(
            "membership_not_found",
            membership_id=membership_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def memberships_listed(self, principal_id: str, count: int) -> None:
        self._logger.debug(
            "memberships_listed",
            principal_id=principal_id,
            count=count,
            **self._get_context_kwargs(),
        )


class PrincipalRepositoryProbe(Protocol):
    """Domain probe for the principal mirror."""

    def principal_provisioned(self, principal_id: str) -> None:
        """Record that a principal was seen for the first time."""
        ...

    def principal_refreshed(self, principal_id: str) -> None:
        """Record that a known principal's profile changed."""
        ...

    def with_context(self, context: ObservationContext) -> PrincipalRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPrincipalRepositoryProbe:
    """Default implementation of PrincipalRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultPrincipalRepositoryProbe:
        return DefaultPrincipalRepositoryProbe(logger=self._logger, context=context)

    def principal_provisioned(self, principal_id: str) -> None:
        self._logger.info(
            "principal_provisioned",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def principal_refreshed(self, principal_id: str) -> None:
        self._logger.debug(
            "principal_refreshed",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
