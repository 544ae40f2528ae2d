"""Domain probes for organization repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OrganizationRepositoryProbe(Protocol):
    """Domain probe for organization repository operations.

    ``entity`` is "role", "location", "shift" or "shift_template".
    """

    def entity_saved(self, entity: str, entity_id: str, tenant_id: str) -> None:
        ...

    def entity_deleted(self, entity: str, entity_id: str, tenant_id: str) -> None:
        ...

    def entities_listed(self, entity: str, tenant_id: str, count: int) -> None:
        ...

    def shift_overlap_rejected(self, membership_id: str, tenant_id: str) -> None:
        ...

    def with_context(
        self, context: ObservationContext
    ) -> OrganizationRepositoryProbe:
        ...


class DefaultOrganizationRepositoryProbe:
    """Default implementation of OrganizationRepositoryProbe using structlog."""

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
    ) -> DefaultOrganizationRepositoryProbe:
        return DefaultOrganizationRepositoryProbe(
            logger=self._logger, context=context
        )

    def entity_saved(self, entity: str, entity_id: str, tenant_id: str) -> None:
        self._logger.debug(
            f"{entity}_saved",
            entity_id=entity_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def entity_deleted(self, entity: str, entity_id: str, tenant_id: str) -> None:
        self._logger.debug(
            f"{entity}_row_deleted",
            entity_id=entity_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def entities_listed(self, entity: str, tenant_id: str, count: int) -> None:
        self._logger.debug(
            f"{entity}_rows_listed",
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def shift_overlap_rejected(self, membership_id: str, tenant_id: str) -> None:
        self._logger.info(
            "shift_overlap_rejected",
            membership_id=membership_id,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )
