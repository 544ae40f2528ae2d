"""Tenant aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.exceptions import InvalidTenantNameError
from iam.domain.value_objects import TenantId

MAX_TENANT_NAME_LENGTH = 100


@dataclass
class Tenant:
    """Tenant aggregate representing a company in the system.

    Tenants are the top-level isolation boundary. Every piece of
    operational data (roles, locations, memberships) belongs to exactly
    one tenant and is deleted with it.

    Business rules:
    - Names are 1 to 100 characters after trimming whitespace
    - Names are not unique; two companies may share a name
    """

    id: TenantId
    name: str

    @classmethod
    def create(cls, name: str) -> Tenant:
        """Factory method for creating a new tenant.

        Args:
            name: The name of the tenant

        Returns:
            A new Tenant aggregate with a generated identifier

        Raises:
            InvalidTenantNameError: If the name is empty or too long
        """
        return cls(id=TenantId.generate(), name=normalize_tenant_name(name))


def normalize_tenant_name(name: str) -> str:
    """Trim a tenant name and enforce its length bounds."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidTenantNameError("Company name is required")
    if len(cleaned) > MAX_TENANT_NAME_LENGTH:
        raise InvalidTenantNameError(
            f"Company name must be at most {MAX_TENANT_NAME_LENGTH} characters"
        )
    return cleaned
