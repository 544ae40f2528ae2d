"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates and read views. Implementations live in the infrastructure
layer and share the caller's database session.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Membership, Tenant
from iam.domain.value_objects import (
    MemberListing,
    MembershipId,
    MembershipView,
    PrincipalId,
    TenantId,
)
from shared_kernel.middleware.tenant_context import Principal


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for Tenant aggregate persistence."""

    async def save(self, tenant: Tenant) -> None:
        """Persist a tenant aggregate (insert or update)."""
        ...

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Retrieve a tenant by its ID.

        Returns:
            The Tenant aggregate, or None if not found
        """
        ...

    async def delete(self, tenant: Tenant) -> bool:
        """Delete a tenant.

        Memberships, roles and locations are removed by the database
        through cascading foreign keys.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IMembershipRepository(Protocol):
    """Repository for Membership aggregates and membership views.

    Every query filters on equality of both tenant and principal
    identifiers where both are known. Membership is never inferred from
    any other relation.
    """

    async def save(self, membership: Membership) -> None:
        """Persist a membership (insert or update)."""
        ...

    async def get_by_id(
        self, membership_id: MembershipId, tenant_id: TenantId
    ) -> Membership | None:
        """Retrieve a membership that belongs to the given tenant.

        A membership of another tenant is reported as not found.
        """
        ...

    async def exists(self, principal_id: PrincipalId, tenant_id: TenantId) -> bool:
        """Check whether the principal belongs to the tenant."""
        ...

    async def list_tenants_for_principal(
        self, principal_id: PrincipalId
    ) -> list[MembershipView]:
        """List the principal's memberships joined with tenant names.

        Returns:
            Views ordered by membership creation time, then membership id
        """
        ...

    async def count_for_principal(self, principal_id: PrincipalId) -> int:
        """Count the tenants the principal belongs to."""
        ...

    async def list_members(self, tenant_id: TenantId) -> list[MemberListing]:
        """List members of a tenant, ordered by membership creation."""
        ...

    async def delete(self, membership: Membership) -> bool:
        """Delete a membership.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IPrincipalRepository(Protocol):
    """Local mirror of principals known to the identity provider."""

    async def ensure(self, principal: Principal) -> None:
        """Insert the principal, or refresh its email and display name."""
        ...


@runtime_checkable
class IRoleReferenceChecker(Protocol):
    """Checks that a role reference belongs to a tenant.

    Roles are owned by the organization context; IAM only needs to know
    whether a membership may point at one.
    """

    async def exists(self, role_id: str, tenant_id: str) -> bool:
        """Return True if the role exists inside the tenant."""
        ...
