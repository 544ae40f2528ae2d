"""Pydantic models for membership API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import Membership
from iam.domain.value_objects import MemberListing


class UpdateMemberRequest(BaseModel):
    """Request model for updating a member of the active tenant."""

    display_name: str | None = Field(default=None, max_length=100)
    role_id: str | None = Field(default=None, description="Role in the same company")


class MemberResponse(BaseModel):
    """Response model for a member of the active tenant."""

    id: str = Field(..., description="Membership ID (ULID format)")
    principal_id: str
    display_name: str | None = None
    email: str | None = None
    role_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_listing(cls, member: MemberListing) -> MemberResponse:
        return cls(
            id=member.membership_id,
            principal_id=member.principal_id,
            display_name=member.display_name,
            email=member.email,
            role_id=member.role_id,
            created_at=member.created_at,
        )

    @classmethod
    def from_domain(cls, membership: Membership) -> MemberResponse:
        return cls(
            id=membership.id.value,
            principal_id=membership.principal_id.value,
            display_name=membership.display_name,
            role_id=membership.role_id,
            created_at=membership.created_at,
        )
