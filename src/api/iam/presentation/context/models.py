"""Pydantic models for the tenant context API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from shared_kernel.middleware.tenant_context import (
    Principal,
    TenantContext,
    TenantSummary,
)


class PrincipalResponse(BaseModel):
    """The authenticated principal."""

    id: str = Field(..., description="Identity provider subject")
    email: str | None = Field(default=None, description="Email address")
    display_name: str | None = Field(default=None, description="Display name")

    @classmethod
    def from_domain(cls, principal: Principal) -> PrincipalResponse:
        return cls(
            id=principal.id,
            email=principal.email,
            display_name=principal.display_name,
        )


class TenantSummaryResponse(BaseModel):
    """A tenant the principal belongs to."""

    id: str = Field(..., description="Tenant ID (ULID format)")
    name: str = Field(..., description="Tenant name")

    @classmethod
    def from_domain(cls, tenant: TenantSummary) -> TenantSummaryResponse:
        return cls(id=tenant.id, name=tenant.name)


class TenantContextResponse(BaseModel):
    """Resolved tenant context of the current request."""

    principal: PrincipalResponse
    active_tenant: TenantSummaryResponse
    tenants: list[TenantSummaryResponse]
    source: Literal["preference", "default", "fallback"] = Field(
        ..., description="How the active tenant was chosen"
    )

    @classmethod
    def from_domain(cls, context: TenantContext) -> TenantContextResponse:
        """Convert a resolved TenantContext to an API response."""
        return cls(
            principal=PrincipalResponse.from_domain(context.principal),
            active_tenant=TenantSummaryResponse.from_domain(context.active_tenant),
            tenants=[TenantSummaryResponse.from_domain(t) for t in context.all_tenants],
            source=context.source,
        )


class SwitchTenantRequest(BaseModel):
    """Request model for switching the active tenant."""

    tenant_id: str = Field(..., description="Tenant to activate", min_length=1)


class SwitchTenantResponse(BaseModel):
    """Outcome of a successful switch request."""

    status: Literal["switched", "unchanged"]
    tenant_id: str
