"""Domain exceptions for the organization bounded context."""


class InvalidRoleNameError(ValueError):
    """Raised when a role name is empty or too long."""

    pass


class InvalidLocationNameError(ValueError):
    """Raised when a location name is empty or too long."""

    pass


class InvalidShiftError(ValueError):
    """Raised when a shift's times or notes are invalid."""

    pass


class InvalidShiftTemplateError(ValueError):
    """Raised when a shift template's name or times are invalid."""

    pass
