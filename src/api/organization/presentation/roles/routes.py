"""HTTP routes for the roles of the active tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.dependencies.tenant_context import get_tenant_context
from organization.application.services import RoleService
from organization.dependencies.role import get_role_service
from organization.domain.exceptions import InvalidRoleNameError
from organization.ports.exceptions import RoleNotFoundError
from organization.presentation.roles.models import RoleNameRequest, RoleResponse
from shared_kernel.membership import MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(
    prefix="/roles",
    tags=["roles"],
)


@router.get("")
async def list_roles(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[RoleService, Depends(get_role_service)],
) -> list[RoleResponse]:
    """List the roles of the active tenant."""
    roles = await service.list(context)
    return [RoleResponse.from_domain(role) for role in roles]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_role(
    request: RoleNameRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Create a role in the active tenant."""
    try:
        role = await service.create(context, request.name)
        return RoleResponse.from_domain(role)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except InvalidRoleNameError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.patch("/{role_id}")
async def rename_role(
    role_id: str,
    request: RoleNameRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    """Rename a role of the active tenant.

    Raises:
        HTTPException: 403 if the caller lost access to the tenant
        HTTPException: 404 if the role is not in the active tenant
        HTTPException: 422 if the name is invalid
    """
    try:
        role = await service.rename(context, role_id, request.name)
        return RoleResponse.from_domain(role)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except RoleNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Role not found"
        )
    except InvalidRoleNameError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def delete_role(
    role_id: str,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[RoleService, Depends(get_role_service)],
) -> None:
    """Delete a role. Members holding it are left without a role."""
    try:
        await service.delete(context, role_id)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except RoleNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Role not found"
        )
