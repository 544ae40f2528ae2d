"""Domain probe for role management operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RoleServiceProbe(Protocol):
    """Domain probe for role management operations."""

    def roles_listed(self, tenant_id: str, count: int) -> None:
        ...

    def role_created(self, tenant_id: str, role_id: str, name: str) -> None:
        ...

    def role_renamed(self, tenant_id: str, role_id: str, name: str) -> None:
        ...

    def role_deleted(self, tenant_id: str, role_id: str) -> None:
        ...

    def role_not_found(self, tenant_id: str, role_id: str) -> None:
        ...

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        """Record that the actor lost membership before a mutation."""
        ...

    def with_context(self, context: ObservationContext) -> RoleServiceProbe:
        ...


class DefaultRoleServiceProbe:
    """Default implementation of RoleServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRoleServiceProbe:
        return DefaultRoleServiceProbe(logger=self._logger, context=context)

    def roles_listed(self, tenant_id: str, count: int) -> None:
        self._logger.debug(
            "roles_listed",
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def role_created(self, tenant_id: str, role_id: str, name: str) -> None:
        self._logger.info(
            "role_created",
            tenant_id=tenant_id,
            role_id=role_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def role_renamed(self, tenant_id: str, role_id: str, name: str) -> None:
        self._logger.info(
            "role_renamed",
            tenant_id=tenant_id,
            role_id=role_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def role_deleted(self, tenant_id: str, role_id: str) -> None:
        self._logger.info(
            "role_deleted",
            tenant_id=tenant_id,
            role_id=role_id,
            **self._get_context_kwargs(),
        )

    def role_not_found(self, tenant_id: str, role_id: str) -> None:
        self._logger.debug(
            "role_not_found",
            tenant_id=tenant_id,
            role_id=role_id,
            **self._get_context_kwargs(),
        )

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        self._logger.warning(
            "role_mutation_membership_revoked",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
