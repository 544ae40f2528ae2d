"""Observability probes for organization application services."""

from organization.application.observability.location_service_probe import (
    DefaultLocationServiceProbe,
    LocationServiceProbe,
)
from organization.application.observability.role_service_probe import (
    DefaultRoleServiceProbe,
    RoleServiceProbe,
)
from organization.application.observability.shift_service_probe import (
    DefaultShiftServiceProbe,
    ShiftServiceProbe,
)
from organization.application.observability.shift_template_service_probe import (
    DefaultShiftTemplateServiceProbe,
    ShiftTemplateServiceProbe,
)

__all__ = [
    "DefaultLocationServiceProbe",
    "DefaultRoleServiceProbe",
    "DefaultShiftServiceProbe",
    "DefaultShiftTemplateServiceProbe",
    "LocationServiceProbe",
    "RoleServiceProbe",
    "ShiftServiceProbe",
    "ShiftTemplateServiceProbe",
]
