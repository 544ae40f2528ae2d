"""Exceptions raised by organization application services.

Not-found errors are also raised for entities that exist in another
tenant, so callers cannot probe for identifiers outside their company.
"""


class RoleNotFoundError(Exception):
    """Raised when a role does not exist in the active tenant."""

    def __init__(self, role_id: str) -> None:
        super().__init__(f"Role {role_id} not found")
        self.role_id = role_id


class LocationNotFoundError(Exception):
    """Raised when a location does not exist in the active tenant."""

    def __init__(self, location_id: str) -> None:
        super().__init__(f"Location {location_id} not found")
        self.location_id = location_id


class ShiftNotFoundError(Exception):
    """Raised when a shift does not exist in the active tenant."""

    def __init__(self, shift_id: str) -> None:
        super().__init__(f"Shift {shift_id} not found")
        self.shift_id = shift_id


class ShiftTemplateNotFoundError(Exception):
    """Raised when a shift template does not exist in the active tenant."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Shift template {template_id} not found")
        self.template_id = template_id


class ShiftConflictError(Exception):
    """Raised when a shift overlaps another shift of the same member."""

    def __init__(self, membership_id: str) -> None:
        super().__init__("This member is already scheduled during this time")
        self.membership_id = membership_id


class InvalidShiftReferenceError(Exception):
    """Raised when a shift names a member, role or location outside the tenant."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown {field} for this company")
        self.field = field
