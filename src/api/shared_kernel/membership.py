"""Membership check port shared across bounded contexts.

Tenant-scoped contexts re-validate that the acting principal still
belongs to the active tenant before every mutation. They depend on this
port rather than on the IAM context that owns memberships.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class MembershipRevokedError(Exception):
    """Raised when the actor no longer belongs to the tenant they act on."""

    def __init__(self, message: str = "Not authorized for this company") -> None:
        super().__init__(message)


@runtime_checkable
class MembershipChecker(Protocol):
    """Answers whether a principal currently belongs to a tenant."""

    async def is_member(self, principal_id: str, tenant_id: str) -> bool:
        """Return True if the principal has a membership in the tenant.

        Implementations must filter by both identifiers and read through
        the caller's transaction.
        """
        ...
