"""HTTP routes for the locations of the active tenant."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.dependencies.tenant_context import get_tenant_context
from organization.application.services import LocationService
from organization.dependencies.location import get_location_service
from organization.domain.exceptions import InvalidLocationNameError
from organization.ports.exceptions import LocationNotFoundError
from organization.presentation.locations.models import (
    LocationNameRequest,
    LocationResponse,
)
from shared_kernel.membership import MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext

router = APIRouter(
    prefix="/locations",
    tags=["locations"],
)


@router.get("")
async def list_locations(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[LocationService, Depends(get_location_service)],
) -> list[LocationResponse]:
    locations = await service.list(context)
    return [LocationResponse.from_domain(location) for location in locations]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_location(
    request: LocationNameRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[LocationService, Depends(get_location_service)],
) -> LocationResponse:
    try:
        location = await service.create(context, request.name)
        return LocationResponse.from_domain(location)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except InvalidLocationNameError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.patch("/{location_id}")
async def rename_location(
    location_id: str,
    request: LocationNameRequest,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[LocationService, Depends(get_location_service)],
) -> LocationResponse:
    try:
        location = await service.rename(context, location_id, request.name)
        return LocationResponse.from_domain(location)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except LocationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Location not found"
        )
    except InvalidLocationNameError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.delete(
    "/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def delete_location(
    location_id: str,
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[LocationService, Depends(get_location_service)],
) -> None:
    try:
        await service.delete(context, location_id)
    except MembershipRevokedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except LocationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Location not found"
        )
