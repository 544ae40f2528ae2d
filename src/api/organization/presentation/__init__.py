"""Organization presentation layer."""

from __future__ import annotations

from fastapi import APIRouter

from organization.presentation import locations, roles, shift_templates, shifts

router = APIRouter(
    prefix="/organization",
    tags=["organization"],
)

router.include_router(roles.router)
router.include_router(locations.router)
router.include_router(shifts.router)
router.include_router(shift_templates.router)

__all__ = ["router"]
