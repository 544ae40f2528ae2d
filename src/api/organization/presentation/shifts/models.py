"""Pydantic models for shift API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, Field

from organization.domain.aggregates import Shift


class ShiftRequest(BaseModel):
    """Request model for scheduling or rescheduling a shift."""

    membership_id: str = Field(
        ..., description="Membership ID of the scheduled member", min_length=1
    )
    starts_at: AwareDatetime
    ends_at: AwareDatetime
    location_id: str | None = Field(default=None, description="Location ID")
    notes: str | None = Field(default=None, max_length=1000)


class ShiftResponse(BaseModel):
    """Response model for shift. Times are UTC."""

    id: str = Field(..., description="Shift ID (ULID format)")
    membership_id: str
    location_id: str | None
    starts_at: datetime
    ends_at: datetime
    notes: str | None

    @classmethod
    def from_domain(cls, shift: Shift) -> ShiftResponse:
        return cls(
            id=shift.id.value,
            membership_id=shift.membership_id,
            location_id=shift.location_id,
            starts_at=shift.starts_at,
            ends_at=shift.ends_at,
            notes=shift.notes,
        )
