"""Domain exceptions for the IAM bounded context."""


class InvalidTenantNameError(ValueError):
    """Raised when a tenant name is empty or too long."""

    pass


class InvalidDisplayNameError(ValueError):
    """Raised when a member display name is too long."""

    pass
