"""Shift scheduling application service."""

from __future__ import annotations

from datetime import datetime
from typing import NoReturn

from sqlalchemy.ext.asyncio import AsyncSession

from organization.application.observability import (
    DefaultShiftServiceProbe,
    ShiftServiceProbe,
)
from organization.domain.aggregates import Shift
from organization.domain.exceptions import InvalidShiftError
from organization.domain.value_objects import LocationId, ShiftId
from organization.ports.exceptions import (
    InvalidShiftReferenceError,
    ShiftConflictError,
    ShiftNotFoundError,
)
from organization.ports.repositories import (
    ILocationRepository,
    IMemberReferenceChecker,
    IShiftRepository,
)
from shared_kernel.invalidation import InvalidationScope, TenantInvalidationPublisher
from shared_kernel.membership import MembershipChecker, MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext


class ShiftService:
    """Application service for a tenant's schedule.

    A shift names a member and optionally a location of the active
    tenant; both references are verified inside the mutating transaction,
    after the actor's own membership. Overlapping shifts of one member are
    refused by the store and surface as ``ShiftConflictError``.
    """

    def __init__(
        self,
        session: AsyncSession,
        shift_repository: IShiftRepository,
        location_repository: ILocationRepository,
        member_reference_checker: IMemberReferenceChecker,
        membership_checker: MembershipChecker,
        invalidation_publisher: TenantInvalidationPublisher,
        probe: ShiftServiceProbe | None = None,
    ):
        self._session = session
        self._shift_repository = shift_repository
        self._location_repository = location_repository
        self._member_reference_checker = member_reference_checker
        self._membership_checker = membership_checker
        self._invalidation_publisher = invalidation_publisher
        self._probe = probe or DefaultShiftServiceProbe()

    async def list(
        self,
        context: TenantContext,
        window_start: datetime | None = None,
        window_end: datetime | None = None,
    ) -> list[Shift]:
        """List the tenant's shifts overlapping the optional window.

        Raises:
            InvalidShiftError: If the window does not end after it starts
        """
        if window_start and window_end and window_end <= window_start:
            raise InvalidShiftError("Window must end after it starts")

        shifts = await self._shift_repository.list_for_tenant(
            context.tenant_id, window_start, window_end
        )
        self._probe.shifts_listed(context.tenant_id, len(shifts))
        return shifts

    async def create(
        self,
        context: TenantContext,
        membership_id: str,
        starts_at: datetime,
        ends_at: datetime,
        location_id: str | None = None,
        notes: str | None = None,
    ) -> Shift:
        shift = Shift.create(
            tenant_id=context.tenant_id,
            membership_id=_reference(membership_id),
            starts_at=starts_at,
            ends_at=ends_at,
            location_id=_reference(location_id),
            notes=notes,
        )

        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            await self._check_references(context, shift)
            await self._save(context, shift)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.SHIFT
            )

        self._probe.shift_created(
            context.tenant_id, shift.id.value, shift.membership_id
        )
        return shift

    async def update(
        self,
        context: TenantContext,
        shift_id: str,
        membership_id: str,
        starts_at: datetime,
        ends_at: datetime,
        location_id: str | None = None,
        notes: str | None = None,
    ) -> Shift:
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            shift = await self._load(context, shift_id)
            shift.reschedule(
                membership_id=_reference(membership_id),
                starts_at=starts_at,
                ends_at=ends_at,
                location_id=_reference(location_id),
                notes=notes,
            )
            await self._check_references(context, shift)
            await self._save(context, shift)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.SHIFT
            )

        self._probe.shift_updated(
            context.tenant_id, shift.id.value, shift.membership_id
        )
        return shift

    async def delete(self, context: TenantContext, shift_id: str) -> None:
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            shift = await self._load(context, shift_id)
            await self._shift_repository.delete(shift)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.SHIFT
            )

        self._probe.shift_deleted(context.tenant_id, shift.id.value)

    async def _save(self, context: TenantContext, shift: Shift) -> None:
        try:
            await self._shift_repository.save(shift)
        except ShiftConflictError:
            self._probe.shift_conflict(context.tenant_id, shift.membership_id)
            raise

    async def _check_references(self, context: TenantContext, shift: Shift) -> None:
        if not await self._member_reference_checker.exists(
            shift.membership_id, context.tenant_id
        ):
            self._reject_reference(context, "member", shift.membership_id)

        if shift.location_id is None:
            return
        try:
            location_id = LocationId.from_string(shift.location_id)
        except ValueError as e:
            self._reject_reference(context, "location", shift.location_id, e)
        if (
            await self._location_repository.get_by_id(location_id, context.tenant_id)
            is None
        ):
            self._reject_reference(context, "location", shift.location_id)

    def _reject_reference(
        self,
        context: TenantContext,
        field: str,
        value: str,
        cause: Exception | None = None,
    ) -> NoReturn:
        self._probe.invalid_reference(context.tenant_id, field, value)
        raise InvalidShiftReferenceError(field) from cause

    async def _load(self, context: TenantContext, shift_id: str) -> Shift:
        try:
            sid = ShiftId.from_string(shift_id)
        except ValueError as e:
            self._probe.shift_not_found(context.tenant_id, shift_id)
            raise ShiftNotFoundError(shift_id) from e

        shift = await self._shift_repository.get_by_id(sid, context.tenant_id)
        if shift is None:
            self._probe.shift_not_found(context.tenant_id, sid.value)
            raise ShiftNotFoundError(shift_id)
        return shift

    async def _ensure_actor_is_member(self, context: TenantContext) -> None:
        if not await self._membership_checker.is_member(
            context.principal.id, context.tenant_id
        ):
            self._probe.actor_membership_revoked(
                context.tenant_id, context.principal.id
            )
            raise MembershipRevokedError()


def _reference(value: str | None) -> str | None:
    """Normalize an identifier from a request; ULIDs compare upper-case."""
    if value is None:
        return None
    return value.strip().upper() or None
