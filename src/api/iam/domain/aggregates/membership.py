"""Membership aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from iam.domain.exceptions import InvalidDisplayNameError
from iam.domain.value_objects import MembershipId, PrincipalId, TenantId

MAX_DISPLAY_NAME_LENGTH = 100


@dataclass
class Membership:
    """Links a principal to a tenant.

    A principal belongs to a tenant if and only if a membership row links
    them. Each principal has at most one membership per tenant. The role
    is an optional reference to a role defined inside the same tenant.
    """

    id: MembershipId
    tenant_id: TenantId
    principal_id: PrincipalId
    display_name: str | None = None
    role_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        principal_id: PrincipalId,
        display_name: str | None = None,
        role_id: str | None = None,
    ) -> Membership:
        """Create a new membership with a generated identifier."""
        return cls(
            id=MembershipId.generate(),
            tenant_id=tenant_id,
            principal_id=principal_id,
            display_name=_clean_display_name(display_name),
            role_id=role_id,
        )

    def update(self, display_name: str | None, role_id: str | None) -> None:
        """Replace the member's display name and role."""
        self.display_name = _clean_display_name(display_name)
        self.role_id = role_id

    def belongs_to(self, tenant_id: TenantId) -> bool:
        return self.tenant_id == tenant_id


def _clean_display_name(display_name: str | None) -> str | None:
    if display_name is None:
        return None
    cleaned = display_name.strip()
    if not cleaned:
        return None
    if len(cleaned) > MAX_DISPLAY_NAME_LENGTH:
        raise InvalidDisplayNameError(
            f"Display name must be at most {MAX_DISPLAY_NAME_LENGTH} characters"
        )
    return cleaned
