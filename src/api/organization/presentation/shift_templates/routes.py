"""HTTP routes for the shift templates of the active tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.dependencies.tenant_context import get_tenant_context
from organization.application.services import ShiftTemplateService
from organization.dependencies.shift import get_shift_template_service
from organization.domain.exceptions import InvalidShiftTemplateError
from organization.ports.exceptions import (
    InvalidShiftReferenceError,
    ShiftTemplateNotFoundError,
)
from organization.presentation.shift_templates.models import (
    ShiftTemplateRequest,
    ShiftTemplateResponse,
)
from shared_kernel.membership import MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(
    prefix="/shift-templates",
    tags=["shift-templates"],
)


@router.get("")
async def list_shift_templates(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftTemplateService, Depends(get_shift_template_service)],
) -> list[ShiftTemplateResponse]:
    templates = await service.list(context)
    return [ShiftTemplateResponse.from_domain(template) for template in templates]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_shift_template(
    request: ShiftTemplateRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftTemplateService, Depends(get_shift_template_service)],
) -> ShiftTemplateResponse:
    try:
        template = await service.create(
            context,
            name=request.name,
            start_time=request.start_time,
            end_time=request.end_time,
            role_id=request.role_id,
            location_id=request.location_id,
        )
        return ShiftTemplateResponse.from_domain(template)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except (InvalidShiftTemplateError, InvalidShiftReferenceError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.put("/{template_id}")
async def update_shift_template(
    template_id: str,
    request: ShiftTemplateRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftTemplateService, Depends(get_shift_template_service)],
) -> ShiftTemplateResponse:
    try:
        template = await service.update(
            context,
            template_id,
            name=request.name,
            start_time=request.start_time,
            end_time=request.end_time,
            role_id=request.role_id,
            location_id=request.location_id,
        )
        return ShiftTemplateResponse.from_domain(template)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ShiftTemplateNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Shift template not found"
        )
    except (InvalidShiftTemplateError, InvalidShiftReferenceError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.delete(
    "/{template_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def delete_shift_template(
    template_id: str,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftTemplateService, Depends(get_shift_template_service)],
) -> None:
    try:
        await service.delete(context, template_id)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ShiftTemplateNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Shift template not found"
        )
