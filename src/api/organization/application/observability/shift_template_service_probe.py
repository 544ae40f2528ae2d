"""Domain probe for shift template management operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ShiftTemplateServiceProbe(Protocol):
    def templates_listed(self, tenant_id: str, count: int) -> None:
        ...

    def template_created(self, tenant_id: str, template_id: str, name: str) -> None:
        ...

    def template_updated(self, tenant_id: str, template_id: str, name: str) -> None:
        ...

    def template_deleted(self, tenant_id: str, template_id: str) -> None:
        ...

    def template_not_found(self, tenant_id: str, template_id: str) -> None:
        ...

    def invalid_reference(self, tenant_id: str, field: str, value: str) -> None:
        ...

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> ShiftTemplateServiceProbe:
        ...


class DefaultShiftTemplateServiceProbe:
    """Default implementation of ShiftTemplateServiceProbe using structlog."""

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
    ) -> DefaultShiftTemplateServiceProbe:
        return DefaultShiftTemplateServiceProbe(logger=self._logger, context=context)

    def templates_listed(self, tenant_id: str, count: int) -> None:
        self._logger.debug(
            "shift_templates_listed",
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def template_created(self, tenant_id: str, template_id: str, name: str) -> None:
        self._logger.info(
            "shift_template_created",
            tenant_id=tenant_id,
            template_id=template_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def template_updated(self, tenant_id: str, template_id: str, name: str) -> None:
        self._logger.info(
            "shift_template_updated",
            tenant_id=tenant_id,
            template_id=template_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def template_deleted(self, tenant_id: str, template_id: str) -> None:
        self._logger.info(
            "shift_template_deleted",
            tenant_id=tenant_id,
            template_id=template_id,
            **self._get_context_kwargs(),
        )

    def template_not_found(self, tenant_id: str, template_id: str) -> None:
        self._logger.debug(
            "shift_template_not_found",
            tenant_id=tenant_id,
            template_id=template_id,
            **self._get_context_kwargs(),
        )

    def invalid_reference(self, tenant_id: str, field: str, value: str) -> None:
        self._logger.debug(
            "shift_template_invalid_reference",
            tenant_id=tenant_id,
            field=field,
            value=value,
            **self._get_context_kwargs(),
        )

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        self._logger.warning(
            "shift_template_mutation_membership_revoked",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
