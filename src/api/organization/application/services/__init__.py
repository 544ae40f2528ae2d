"""Application services for the organization bounded context."""

from organization.application.services.location_service import LocationService
from organization.application.services.role_service import RoleService
from organization.application.services.shift_service import ShiftService
from organization.application.services.shift_template_service import (
    ShiftTemplateService,
)

__all__ = ["LocationService", "RoleService", "ShiftService", "ShiftTemplateService"]
