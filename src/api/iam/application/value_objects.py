"""Application-layer value objects for IAM bounded context.

Outcomes of application operations that the presentation layer turns
into responses and cookie writes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TenantSwitched:
    """The active tenant changed; a new preference must be written."""

    tenant_id: str


@dataclass(frozen=True)
class TenantSwitchUnchanged:
    """The requested tenant is already active; nothing is written."""

    tenant_id: str


@dataclass(frozen=True)
class MemberRemoval:
    """Outcome of removing a member from the active tenant.

    Attributes:
        membership_id: The removed membership
        removed_self: Whether the actor removed their own membership from
            their active tenant, so their preference must be cleared
    """

    membership_id: str
    removed_self: bool
