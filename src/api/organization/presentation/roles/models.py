"""Pydantic models for role API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from organization.domain.aggregates import Role


class RoleNameRequest(BaseModel):
    """Request model for creating or renaming a role."""

    name: str = Field(..., description="Role name", min_length=1, max_length=100)


class RoleResponse(BaseModel):
    """Response model for role."""

    id: str = Field(..., description="Role ID (ULID format)")
    name: str

    @classmethod
    def from_domain(cls, role: Role) -> RoleResponse:
        return cls(id=role.id.value, name=role.name)
