"""Protocol for membership application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MembershipServiceProbe(Protocol):
    """Domain probe for membership management operations."""

    def members_listed(self, tenant_id: str, count: int) -> None:
        ...

    def member_updated(self, tenant_id: str, membership_id: str) -> None:
        ...

    def member_removed(
        self, tenant_id: str, membership_id: str, removed_self: bool
    ) -> None:
        ...

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        """Record that the actor lost membership between resolution and mutation."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipServiceProbe:
        ...


class DefaultMembershipServiceProbe:
    """Default implementation of MembershipServiceProbe using structlog."""

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
    ) -> DefaultMembershipServiceProbe:
        return DefaultMembershipServiceProbe(logger=self._logger, context=context)

    def members_listed(self, tenant_id: str, count: int) -> None:
        self._logger.debug(
            "members_listed",
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def member_updated(self, tenant_id: str, membership_id: str) -> None:
        self._logger.info(
            "member_updated",
            tenant_id=tenant_id,
            membership_id=membership_id,
            **self._get_context_kwargs(),
        )

    def member_removed(
        self, tenant_id: str, membership_id: str, removed_self: bool
    ) -> None:
        self._logger.info(
            "member_removed",
            tenant_id=tenant_id,
            membership_id=membership_id,
            removed_self=removed_self,
            **self._get_context_kwargs(),
        )

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        self._logger.warning(
            "actor_membership_revoked",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
