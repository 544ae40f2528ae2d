"""Pydantic models for tenant API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import Tenant
from iam.domain.value_objects import MembershipView


class CreateTenantRequest(BaseModel):
    """Request model for creating a tenant."""

    name: str = Field(..., description="Company name", min_length=1, max_length=100)


class TenantResponse(BaseModel):
    """Response model for tenant."""

    id: str = Field(..., description="Tenant ID (ULID format)")
    name: str = Field(..., description="Tenant name")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response."""
        return cls(
            id=tenant.id.value,
            name=tenant.name,
        )

    @classmethod
    def from_view(cls, view: MembershipView) -> TenantResponse:
        """Convert a membership view to API response."""
        return cls(id=view.tenant_id, name=view.tenant_name)
