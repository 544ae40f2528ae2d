"""Domain probe for location management operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class LocationServiceProbe(Protocol):
    """Domain probe for location management operations."""

    def locations_listed(self, tenant_id: str, count: int) -> None:
        ...

    def location_created(self, tenant_id: str, location_id: str, name: str) -> None:
        ...

    def location_renamed(self, tenant_id: str, location_id: str, name: str) -> None:
        ...

    def location_deleted(self, tenant_id: str, location_id: str) -> None:
        ...

    def location_not_found(self, tenant_id: str, location_id: str) -> None:
        ...

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        """Record that the actor lost membership before a mutation."""
        ...

    def with_context(self, context: ObservationContext) -> LocationServiceProbe:
        ...


class DefaultLocationServiceProbe:
    """Default implementation of LocationServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultLocationServiceProbe:
        return DefaultLocationServiceProbe(logger=self._logger, context=context)

    def locations_listed(self, tenant_id: str, count: int) -> None:
        self._logger.debug(
            "locations_listed",
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def location_created(self, tenant_id: str, location_id: str, name: str) -> None:
        self._logger.info(
            "location_created",
            tenant_id=tenant_id,
            location_id=location_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def location_renamed(self, tenant_id: str, location_id: str, name: str) -> None:
        self._logger.info(
            "location_renamed",
            tenant_id=tenant_id,
            location_id=location_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def location_deleted(self, tenant_id: str, location_id: str) -> None:
        self._logger.info(
            "location_deleted",
            tenant_id=tenant_id,
            location_id=location_id,
            **self._get_context_kwargs(),
        )

    def location_not_found(self, tenant_id: str, location_id: str) -> None:
        self._logger.debug(
            "location_not_found",
            tenant_id=tenant_id,
            location_id=location_id,
            **self._get_context_kwargs(),
        )

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        self._logger.warning(
            "location_mutation_membership_revoked",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
