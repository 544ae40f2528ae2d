"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository and service operations. They should be caught and handled by
the presentation layer.
"""


class UnauthorizedError(Exception):
    """Raised when a principal lacks permission to perform an operation.

    The message never reveals whether the target exists. The presentation
    layer returns HTTP 403 without exposing internal details.
    """

    def __init__(
        self, message: str = "Not authorized for this company or it does not exist"
    ) -> None:
        super().__init__(message)


class TenantLimitReachedError(Exception):
    """Raised when a principal already belongs to the maximum number of tenants."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"You can belong to at most {limit} companies")


class MembershipNotFoundError(Exception):
    """Raised when a membership does not exist in the active tenant."""

    pass


class RoleNotInTenantError(Exception):
    """Raised when a role reference does not belong to the active tenant."""

    pass


class InvalidPreferenceError(Exception):
    """Raised when an active-tenant preference cannot be trusted.

    Covers bad signatures, expired preferences, malformed values and
    preferences issued to another principal.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class TenantAccessVerificationError(Exception):
    """Raised when tenant access could not be verified at all.

    Signals a collaborator failure (identity provider or membership
    store), never a missing identity or membership. Mapped to HTTP 503.
    """

    def __init__(self, collaborator: str, error_type: str) -> None:
        self.collaborator = collaborator
        self.error_type = error_type
        super().__init__("Access verification failed. Please try again.")
