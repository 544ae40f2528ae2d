"""Ports for the organization bounded context."""

from organization.ports.exceptions import (
    InvalidShiftReferenceError,
    LocationNotFoundError,
    RoleNotFoundError,
    ShiftConflictError,
    ShiftNotFoundError,
    ShiftTemplateNotFoundError,
)
from organization.ports.repositories import (
    ILocationRepository,
    IMemberReferenceChecker,
    IRoleRepository,
    IShiftRepository,
    IShiftTemplateRepository,
)

__all__ = [
    "ILocationRepository",
    "IMemberReferenceChecker",
    "IRoleRepository",
    "IShiftRepository",
    "IShiftTemplateRepository",
    "InvalidShiftReferenceError",
    "LocationNotFoundError",
    "RoleNotFoundError",
    "ShiftConflictError",
    "ShiftNotFoundError",
    "ShiftTemplateNotFoundError",
]
