"""Domain probe for scheduling operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ShiftServiceProbe(Protocol):
    """Domain probe for shift scheduling operations."""

    def shifts_listed(self, tenant_id: str, count: int) -> None:
        ...

    def shift_created(
        self, tenant_id: str, shift_id: str, membership_id: str
    ) -> None:
        ...

    def shift_updated(
        self, tenant_id: str, shift_id: str, membership_id: str
    ) -> None:
        ...

    def shift_deleted(self, tenant_id: str, shift_id: str) -> None:
        ...

    def shift_not_found(self, tenant_id: str, shift_id: str) -> None:
        ...

    def shift_conflict(self, tenant_id: str, membership_id: str) -> None:
        """Record that a shift overlapped another shift of the member."""
        ...

    def invalid_reference(self, tenant_id: str, field: str, value: str) -> None:
        """Record a member or location that is not part of the tenant."""
        ...

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> ShiftServiceProbe:
        ...


class DefaultShiftServiceProbe:
    """Default implementation of ShiftServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultShiftServiceProbe:
        return DefaultShiftServiceProbe(logger=self._logger, context=context)

    def shifts_listed(self, tenant_id: str, count: int) -> None:
        self._logger.debug(
            "shifts_listed",
            tenant_id=tenant_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def shift_created(
        self, tenant_id: str, shift_id: str, membership_id: str
    ) -> None:
        self._logger.info(
            "shift_created",
            tenant_id=tenant_id,
            shift_id=shift_id,
            membership_id=membership_id,
            **self._get_context_kwargs(),
        )

    def shift_updated(
        self, tenant_id: str, shift_id: str, membership_id: str
    ) -> None:
        self._logger.info(
            "shift_updated",
            tenant_id=tenant_id,
            shift_id=shift_id,
            membership_id=membership_id,
            **self._get_context_kwargs(),
        )

    def shift_deleted(self, tenant_id: str, shift_id: str) -> None:
        self._logger.info(
            "shift_deleted",
            tenant_id=tenant_id,
            shift_id=shift_id,
            **self._get_context_kwargs(),
        )

    def shift_not_found(self, tenant_id: str, shift_id: str) -> None:
        self._logger.debug(
            "shift_not_found",
            tenant_id=tenant_id,
            shift_id=shift_id,
            **self._get_context_kwargs(),
        )

    def shift_conflict(self, tenant_id: str, membership_id: str) -> None:
        self._logger.info(
            "shift_conflict",
            tenant_id=tenant_id,
            membership_id=membership_id,
            **self._get_context_kwargs(),
        )

    def invalid_reference(self, tenant_id: str, field: str, value: str) -> None:
        self._logger.debug(
            "shift_invalid_reference",
            tenant_id=tenant_id,
            field=field,
            value=value,
            **self._get_context_kwargs(),
        )

    def actor_membership_revoked(self, tenant_id: str, principal_id: str) -> None:
        self._logger.warning(
            "shift_mutation_membership_revoked",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
