"""Shift template aggregate for the organization context."""

from __future__ import annotations

import re
from dataclasses import dataclass

from organization.domain.exceptions import InvalidShiftTemplateError
from organization.domain.value_objects import ShiftTemplateId

MAX_SHIFT_TEMPLATE_NAME_LENGTH = 100

# 24-hour wall-clock time, e.g. "06:30"
_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass
class ShiftTemplate:
    """A reusable shift pattern such as "Morning barista".

    Times are wall-clock "HH:MM" strings without a date or timezone. An
    end time earlier than the start time describes an overnight shift.
    """

    id: ShiftTemplateId
    tenant_id: str
    name: str
    start_time: str
    end_time: str
    role_id: str | None = None
    location_id: str | None = None

    @classmethod
    def create(
        cls,
        tenant_id: str,
        name: str,
        start_time: str,
        end_time: str,
        role_id: str | None = None,
        location_id: str | None = None,
    ) -> ShiftTemplate:
        """Create a new shift template.

        Raises:
            InvalidShiftTemplateError: If the name is empty or too long, a
                time is not "HH:MM", or start and end are equal
        """
        start_time, end_time = _check_times(start_time, end_time)
        return cls(
            id=ShiftTemplateId.generate(),
            tenant_id=tenant_id,
            name=_clean_name(name),
            start_time=start_time,
            end_time=end_time,
            role_id=role_id,
            location_id=location_id,
        )

    def update(
        self,
        name: str,
        start_time: str,
        end_time: str,
        role_id: str | None = None,
        location_id: str | None = None,
    ) -> None:
        self.name = _clean_name(name)
        self.start_time, self.end_time = _check_times(start_time, end_time)
        self.role_id = role_id
        self.location_id = location_id

    @property
    def is_overnight(self) -> bool:
        return self.end_time < self.start_time


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidShiftTemplateError("Template name is required")
    if len(cleaned) > MAX_SHIFT_TEMPLATE_NAME_LENGTH:
        raise InvalidShiftTemplateError(
            f"Template name must be at most {MAX_SHIFT_TEMPLATE_NAME_LENGTH} characters"
        )
    return cleaned


def _check_times(start_time: str, end_time: str) -> tuple[str, str]:
    for value in (start_time, end_time):
        if not isinstance(value, str) or not _TIME_OF_DAY.match(value):
            raise InvalidShiftTemplateError("Times must use the HH:MM format")
    if start_time == end_time:
        raise InvalidShiftTemplateError("Template must end at a different time")
    return start_time, end_time
