"""Aggregates for the organization bounded context."""

from organization.domain.aggregates.location import Location
from organization.domain.aggregates.role import Role
from organization.domain.aggregates.shift import Shift
from organization.domain.aggregates.shift_template import ShiftTemplate

__all__ = ["Location", "Role", "Shift", "ShiftTemplate"]
