"""Shift aggregate for the organization context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from organization.domain.exceptions import InvalidShiftError
from organization.domain.value_objects import ShiftId

MAX_SHIFT_NOTES_LENGTH = 1000


@dataclass
class Shift:
    """A block of scheduled work for one member of a tenant.

    ``membership_id`` names the scheduled member. Times are stored in UTC
    and form the half-open range ``[starts_at, ends_at)``, so back-to-back
    shifts do not overlap. Overlap between shifts of the same member is
    rejected by the store, which is the only place that sees concurrent
    writers.
    """

    id: ShiftId
    tenant_id: str
    membership_id: str
    starts_at: datetime
    ends_at: datetime
    location_id: str | None = None
    notes: str | None = None

    @classmethod
    def create(
        cls,
        tenant_id: str,
        membership_id: str,
        starts_at: datetime,
        ends_at: datetime,
        location_id: str | None = None,
        notes: str | None = None,
    ) -> Shift:
        """Schedule a new shift.

        Raises:
            InvalidShiftError: If a time is naive, the shift does not end
                after it starts, or the notes are too long
        """
        starts_at, ends_at = _check_times(starts_at, ends_at)
        return cls(
            id=ShiftId.generate(),
            tenant_id=tenant_id,
            membership_id=membership_id,
            starts_at=starts_at,
            ends_at=ends_at,
            location_id=location_id,
            notes=_clean_notes(notes),
        )

    def reschedule(
        self,
        membership_id: str,
        starts_at: datetime,
        ends_at: datetime,
        location_id: str | None = None,
        notes: str | None = None,
    ) -> None:
        """Replace every editable field of the shift."""
        self.starts_at, self.ends_at = _check_times(starts_at, ends_at)
        self.membership_id = membership_id
        self.location_id = location_id
        self.notes = _clean_notes(notes)

    @property
    def duration(self) -> timedelta:
        return self.ends_at - self.starts_at


def _check_times(starts_at: datetime, ends_at: datetime) -> tuple[datetime, datetime]:
    for value in (starts_at, ends_at):
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidShiftError("Shift times must include a timezone")
    if ends_at <= starts_at:
        raise InvalidShiftError("Shift must end after it starts")
    return starts_at.astimezone(timezone.utc), ends_at.astimezone(timezone.utc)


def _clean_notes(notes: str | None) -> str | None:
    cleaned = (notes or "").strip()
    if len(cleaned) > MAX_SHIFT_NOTES_LENGTH:
        raise InvalidShiftError(
            f"Shift notes must be at most {MAX_SHIFT_NOTES_LENGTH} characters"
        )
    return cleaned or None
