"""PostgreSQL implementation of IShiftRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from organization.domain.aggregates import Shift
from organization.domain.value_objects import ShiftId
from organization.infrastructure.models import SHIFT_OVERLAP_CONSTRAINT, ShiftModel
from organization.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    OrganizationRepositoryProbe,
)
from organization.ports.exceptions import ShiftConflictError
from organization.ports.repositories import IShiftRepository

EXCLUSION_VIOLATION = "23P01"


class ShiftRepository(IShiftRepository):
    """Repository managing PostgreSQL storage for Shift aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: OrganizationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultOrganizationRepositoryProbe()

    async def save(self, shift: Shift) -> None:
        """Insert or update a shift.

        Raises:
            ShiftConflictError: If the store rejects the shift because it
                overlaps another shift of the same membership
        """
        model = await self._get_model(shift.id.value, shift.tenant_id)

        if model:
            model.membership_id = shift.membership_id
            model.location_id = shift.location_id
            model.starts_at = shift.starts_at
            model.ends_at = shift.ends_at
            model.notes = shift.notes
        else:
            self._session.add(
                ShiftModel(
                    id=shift.id.value,
                    tenant_id=shift.tenant_id,
                    membership_id=shift.membership_id,
                    location_id=shift.location_id,
                    starts_at=shift.starts_at,
                    ends_at=shift.ends_at,
                    notes=shift.notes,
                )
            )

        try:
            await self._session.flush()
        except IntegrityError as e:
            if not _is_overlap(e):
                raise
            self._probe.shift_overlap_rejected(shift.membership_id, shift.tenant_id)
            raise ShiftConflictError(shift.membership_id) from e

        self._probe.entity_saved("shift", shift.id.value, shift.tenant_id)

    async def get_by_id(self, shift_id: ShiftId, tenant_id: str) -> Shift | None:
        model = await self._get_model(shift_id.value, tenant_id)
        if model is None:
            return None
        return self._to_domain(model)

    async def list_for_tenant(
        self,
        tenant_id: str,
        window_start: datetime | None = None,
        window_end: datetime | None = None,
    ) -> list[Shift]:
        """List shifts overlapping ``[window_start, window_end)``.

        Either bound may be omitted to leave that side open.
        """
        stmt = select(ShiftModel).where(ShiftModel.tenant_id == tenant_id)
        if window_start is not None:
            stmt = stmt.where(ShiftModel.ends_at > window_start)
        if window_end is not None:
            stmt = stmt.where(ShiftModel.starts_at < window_end)
        stmt = stmt.order_by(ShiftModel.starts_at, ShiftModel.id)

        result = await self._session.execute(stmt)
        shifts = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.entities_listed("shift", tenant_id, len(shifts))
        return shifts

    async def delete(self, shift: Shift) -> bool:
        model = await self._get_model(shift.id.value, shift.tenant_id)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.entity_deleted("shift", shift.id.value, shift.tenant_id)
        return True

    async def _get_model(self, shift_id: str, tenant_id: str) -> ShiftModel | None:
        stmt = select(ShiftModel).where(
            ShiftModel.id == shift_id,
            ShiftModel.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: ShiftModel) -> Shift:
        return Shift(
            id=ShiftId(value=model.id),
            tenant_id=model.tenant_id,
            membership_id=model.membership_id,
            starts_at=model.starts_at,
            ends_at=model.ends_at,
            location_id=model.location_id,
            notes=model.notes,
        )


def _is_overlap(error: IntegrityError) -> bool:
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(
        error.orig, "pgcode", None
    )
    return sqlstate == EXCLUSION_VIOLATION or SHIFT_OVERLAP_CONSTRAINT in str(
        error.orig
    )
