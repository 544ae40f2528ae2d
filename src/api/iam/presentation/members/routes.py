"""HTTP routes for managing members of the active tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from iam.application.services import MembershipService
from iam.dependencies.membership import get_membership_service
from iam.dependencies.tenant_context import get_tenant_context
from iam.domain.exceptions import InvalidDisplayNameError
from iam.ports.exceptions import (
    MembershipNotFoundError,
    RoleNotInTenantError,
    UnauthorizedError,
)
from iam.presentation.cookies import clear_preference_cookie
from iam.presentation.members.models import MemberResponse, UpdateMemberRequest
from infrastructure.settings import get_tenancy_settings
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(
    prefix="/members",
    tags=["members"],
)


@router.get("")
async def list_members(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> list[MemberResponse]:
    """List members of the active tenant."""
    members = await service.list_members(context)
    return [MemberResponse.from_listing(member) for member in members]


@router.patch("/{membership_id}")
async def update_member(
    membership_id: str,
    request: UpdateMemberRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> MemberResponse:
    """Change a member's display name and role.

    Raises:
        HTTPException: 403 if the caller lost access to the tenant
        HTTPException: 404 if the member is not in the active tenant
        HTTPException: 422 if the role is not defined in the active tenant
    """
    try:
        membership = await service.update_member(
            context,
            membership_id=membership_id,
            display_name=request.display_name,
            role_id=request.role_id,
        )
        return MemberResponse.from_domain(membership)
    except UnauthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except MembershipNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Member not found"
        )
    except (RoleNotInTenantError, InvalidDisplayNameError) as e:
        detail = (
            "Role does not exist in this company"
            if isinstance(e, RoleNotInTenantError)
            else str(e)
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail
        )


@router.delete(
    "/{membership_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def remove_member(
    membership_id: str,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> Response:
    """Remove a member from the active tenant.

    A caller removing themself also loses their active-tenant preference.
    """
    try:
        removal = await service.remove_member(context, membership_id)
    except UnauthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except MembershipNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Member not found"
        )

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    if removal.removed_self:
        clear_preference_cookie(response, get_tenancy_settings())
    return response
