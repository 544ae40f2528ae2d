"""Pydantic models for location API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from organization.domain.aggregates import Location


class LocationNameRequest(BaseModel):
    """Request model for creating or renaming a location."""

    name: str = Field(..., description="Location name", min_length=1, max_length=100)


class LocationResponse(BaseModel):
    """Response model for location."""

    id: str = Field(..., description="Location ID (ULID format)")
    name: str

    @classmethod
    def from_domain(cls, location: Location) -> LocationResponse:
        return cls(id=location.id.value, name=location.name)
