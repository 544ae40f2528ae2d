"""Pydantic models for shift template API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from organization.domain.aggregates import ShiftTemplate


class ShiftTemplateRequest(BaseModel):
    """Request model for creating or updating a shift template."""

    name: str = Field(..., description="Template name", min_length=1, max_length=100)
    start_time: str = Field(..., description="Start time, HH:MM", examples=["06:30"])
    end_time: str = Field(..., description="End time, HH:MM", examples=["14:30"])
    role_id: str | None = None
    location_id: str | None = None


class ShiftTemplateResponse(BaseModel):
    """Response model for shift template."""

    id: str = Field(..., description="Shift template ID (ULID format)")
    name: str
    start_time: str
    end_time: str
    role_id: str | None
    location_id: str | None

    @classmethod
    def from_domain(cls, template: ShiftTemplate) -> ShiftTemplateResponse:
        return cls(
            id=template.id.value,
            name=template.name,
            start_time=template.start_time,
            end_time=template.end_time,
            role_id=template.role_id,
            location_id=template.location_id,
        )
