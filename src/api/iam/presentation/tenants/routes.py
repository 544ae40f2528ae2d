"""HTTP routes for tenant management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from iam.application.services import TenantService
from iam.dependencies.authentication import get_current_principal
from iam.dependencies.tenant import get_tenant_service
from iam.dependencies.tenant_context import get_preference_codec, get_preference_cookie
from iam.domain.exceptions import InvalidTenantNameError
from iam.ports.exceptions import TenantLimitReachedError, UnauthorizedError
from iam.ports.identity import PreferenceCodec
from iam.presentation.cookies import clear_preference_cookie, read_preferred_tenant_id
from iam.presentation.tenants.models import CreateTenantRequest, TenantResponse
from infrastructure.settings import get_tenancy_settings
from shared_kernel.middleware.tenant_context import Principal

router = APIRouter(
    prefix="/tenants",
    tags=["tenants"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
async def create_tenant(
    request: CreateTenantRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantResponse:
    """Create a new tenant.

    Uses get_current_principal (not get_tenant_context) because this is
    the onboarding endpoint: principals create their first company before
    they have a tenant context. The caller becomes the first member.

    Raises:
        HTTPException: 409 if the caller is at the company limit
        HTTPException: 422 if the name is invalid
    """
    try:
        tenant = await service.create_tenant(name=request.name, principal=principal)
        return TenantResponse.from_domain(tenant)

    except TenantLimitReachedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except InvalidTenantNameError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


@router.get("")
async def list_tenants(
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[TenantService, Depends(get_tenant_service)],
) -> list[TenantResponse]:
    """List the companies the caller belongs to, oldest membership first."""
    views = await service.list_tenants(principal)
    return [TenantResponse.from_view(view) for view in views]


@router.delete(
    "/{tenant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Tenant deleted successfully"},
        403: {"description": "Not a member, or tenant does not exist"},
    },
)
async def delete_tenant(
    tenant_id: str,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[TenantService, Depends(get_tenant_service)],
    raw_preference: Annotated[str | None, Depends(get_preference_cookie)],
    codec: Annotated[PreferenceCodec, Depends(get_preference_codec)],
) -> Response:
    """Delete a tenant and everything scoped to it.

    Clears the caller's active-tenant preference when it pointed at the
    deleted tenant.
    """
    try:
        await service.delete_tenant(tenant_id, principal)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    preferred = read_preferred_tenant_id(raw_preference, principal.id, codec)
    if preferred is not None and preferred == tenant_id.upper():
        clear_preference_cookie(response, get_tenancy_settings())
    return response
