"""Domain probe for tenant context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the active tenant of a
request and switching it.

The "no preference" and "stale preference discarded" paths both fall
back to the first tenant; they are logged under different event names so
the two cases can be told apart.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context resolution operations."""

    def tenant_resolved_from_preference(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that the stored preference selected the active tenant."""
        ...

    def tenant_resolved_from_default(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that no preference was stored and the first tenant was used."""
        ...

    def stale_preference_discarded(
        self,
        preferred_tenant_id: str,
        fallback_tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that the preference named a tenant the principal left."""
        ...

    def preference_rejected(
        self,
        principal_id: str,
        reason: str,
    ) -> None:
        """Record that the preference cookie failed verification."""
        ...

    def not_authenticated(self) -> None:
        """Record that the request carried no valid identity."""
        ...

    def no_tenant_membership(self, principal_id: str) -> None:
        """Record that an authenticated principal has no memberships."""
        ...

    def collaborator_failed(
        self,
        collaborator: str,
        error: Exception,
        principal_id: str | None = None,
    ) -> None:
        """Record that the identity provider or membership store failed."""
        ...

    def tenant_switched(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that the principal switched their active tenant."""
        ...

    def tenant_switch_unchanged(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record a switch request for the already-active tenant."""
        ...

    def tenant_switch_denied(
        self,
        requested_tenant_id: str,
        principal_id: str,
        preference_cleared: bool,
    ) -> None:
        """Record that a switch to a non-member tenant was refused."""
        ...

    def stream_membership_lost(self, tenant_id: str, principal_id: str) -> None:
        """Record that an open invalidation stream lost its membership."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_resolved_from_preference(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that the stored preference selected the active tenant."""
        self._logger.debug(
            "tenant_context_resolved_from_preference",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def tenant_resolved_from_default(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that no preference was stored and the first tenant was used."""
        self._logger.info(
            "tenant_context_resolved_from_default",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def stale_preference_discarded(
        self,
        preferred_tenant_id: str,
        fallback_tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that the preference named a tenant the principal left."""
        self._logger.warning(
            "tenant_context_stale_preference_discarded",
            preferred_tenant_id=preferred_tenant_id,
            tenant_id=fallback_tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def preference_rejected(
        self,
        principal_id: str,
        reason: str,
    ) -> None:
        """Record that the preference cookie failed verification."""
        self._logger.warning(
            "tenant_context_preference_rejected",
            principal_id=principal_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def not_authenticated(self) -> None:
        """Record that the request carried no valid identity."""
        self._logger.debug(
            "tenant_context_not_authenticated",
            **self._get_context_kwargs(),
        )

    def no_tenant_membership(self, principal_id: str) -> None:
        """Record that an authenticated principal has no memberships."""
        self._logger.info(
            "tenant_context_no_tenant",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def collaborator_failed(
        self,
        collaborator: str,
        error: Exception,
        principal_id: str | None = None,
    ) -> None:
        """Record that the identity provider or membership store failed."""
        self._logger.error(
            "tenant_context_collaborator_failed",
            collaborator=collaborator,
            principal_id=principal_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def tenant_switched(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record that the principal switched their active tenant."""
        self._logger.info(
            "tenant_context_switched",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def tenant_switch_unchanged(
        self,
        tenant_id: str,
        principal_id: str,
    ) -> None:
        """Record a switch request for the already-active tenant."""
        self._logger.debug(
            "tenant_context_switch_unchanged",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def tenant_switch_denied(
        self,
        requested_tenant_id: str,
        principal_id: str,
        preference_cleared: bool,
    ) -> None:
        """Record that a switch to a non-member tenant was refused."""
        self._logger.warning(
            "tenant_context_switch_denied",
            requested_tenant_id=requested_tenant_id,
            principal_id=principal_id,
            preference_cleared=preference_cleared,
            **self._get_context_kwargs(),
        )

    def stream_membership_lost(self, tenant_id: str, principal_id: str) -> None:
        """Record that an open invalidation stream lost its membership."""
        self._logger.info(
            "tenant_context_stream_membership_lost",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
