"""SQLAlchemy ORM models for the organization bounded context."""

from organization.infrastructure.models.location import LocationModel
from organization.infrastructure.models.role import RoleModel
from organization.infrastructure.models.shift import (
    SHIFT_OVERLAP_CONSTRAINT,
    ShiftModel,
    ShiftTemplateModel,
)

__all__ = [
    "LocationModel",
    "RoleModel",
    "SHIFT_OVERLAP_CONSTRAINT",
    "ShiftModel",
    "ShiftTemplateModel",
]
