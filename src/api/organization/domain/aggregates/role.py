"""Role aggregate for the organization context."""

from __future__ import annotations

from dataclasses import dataclass

from organization.domain.exceptions import InvalidRoleNameError
from organization.domain.value_objects import RoleId

MAX_ROLE_NAME_LENGTH = 100


@dataclass
class Role:
    """A job role defined by a tenant, such as "Barista" or "Shift lead".

    Members may be assigned one role of the tenant they belong to.
    Deleting a role leaves its members without a role.
    """

    id: RoleId
    tenant_id: str
    name: str

    @classmethod
    def create(cls, tenant_id: str, name: str) -> Role:
        """Create a new role in a tenant.

        Raises:
            InvalidRoleNameError: If the name is empty or too long
        """
        return cls(id=RoleId.generate(), tenant_id=tenant_id, name=_clean_name(name))

    def rename(self, name: str) -> None:
        """Rename the role.

        Raises:
            InvalidRoleNameError: If the name is empty or too long
        """
        self.name = _clean_name(name)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidRoleNameError("Role name is required")
    if len(cleaned) > MAX_ROLE_NAME_LENGTH:
        raise InvalidRoleNameError(
            f"Role name must be at most {MAX_ROLE_NAME_LENGTH} characters"
        )
    return cleaned
