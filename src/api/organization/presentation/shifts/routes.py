"""HTTP routes for the schedule of the active tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import AwareDatetime

from iam.dependencies.tenant_context import get_tenant_context
from organization.application.services import ShiftService
from organization.dependencies.shift import get_shift_service
from organization.domain.exceptions import InvalidShiftError
from organization.ports.exceptions import (
    InvalidShiftReferenceError,
    ShiftConflictError,
    ShiftNotFoundError,
)
from organization.presentation.shifts.models import ShiftRequest, ShiftResponse
from shared_kernel.membership import MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(
    prefix="/shifts",
    tags=["shifts"],
)


@router.get("")
async def list_shifts(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftService, Depends(get_shift_service)],
    window_start: Annotated[AwareDatetime | None, Query(alias="from")] = None,
    window_end: Annotated[AwareDatetime | None, Query(alias="to")] = None,
) -> list[ShiftResponse]:
    """List shifts overlapping the optional ``[from, to)`` window."""
    try:
        shifts = await service.list(context, window_start, window_end)
    except InvalidShiftError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )
    return [ShiftResponse.from_domain(shift) for shift in shifts]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_shift(
    request: ShiftRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftService, Depends(get_shift_service)],
) -> ShiftResponse:
    try:
        shift = await service.create(
            context,
            membership_id=request.membership_id,
            starts_at=request.starts_at,
            ends_at=request.ends_at,
            location_id=request.location_id,
            notes=request.notes,
        )
        return ShiftResponse.from_domain(shift)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ShiftConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (InvalidShiftError, InvalidShiftReferenceError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.put("/{shift_id}")
async def update_shift(
    shift_id: str,
    request: ShiftRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftService, Depends(get_shift_service)],
) -> ShiftResponse:
    """Replace every editable field of a shift."""
    try:
        shift = await service.update(
            context,
            shift_id,
            membership_id=request.membership_id,
            starts_at=request.starts_at,
            ends_at=request.ends_at,
            location_id=request.location_id,
            notes=request.notes,
        )
        return ShiftResponse.from_domain(shift)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ShiftNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found"
        )
    except ShiftConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (InvalidShiftError, InvalidShiftReferenceError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.delete(
    "/{shift_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def delete_shift(
    shift_id: str,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[ShiftService, Depends(get_shift_service)],
) -> None:
    try:
        await service.delete(context, shift_id)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ShiftNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Shift not found"
        )
