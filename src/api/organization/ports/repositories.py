"""Repository protocols (ports) for the organization bounded context.

Every lookup takes the tenant id alongside the entity id. Implementations
must filter on both.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from organization.domain.aggregates import Location, Role, Shift, ShiftTemplate
from organization.domain.value_objects import (
    LocationId,
    RoleId,
    ShiftId,
    ShiftTemplateId,
)


@runtime_checkable
class IRoleRepository(Protocol):
    """Repository for Role aggregate persistence."""

    async def save(self, role: Role) -> None:
        """Persist a role (insert or update)."""
        ...

    async def get_by_id(self, role_id: RoleId, tenant_id: str) -> Role | None:
        """Retrieve a role of the given tenant, or None."""
        ...

    async def list_for_tenant(self, tenant_id: str) -> list[Role]:
        """List a tenant's roles ordered by name."""
        ...

    async def delete(self, role: Role) -> bool:
        """Delete a role. Memberships holding it lose their role."""
        ...


@runtime_checkable
class ILocationRepository(Protocol):
    """Repository for Location aggregate persistence."""

    async def save(self, location: Location) -> None:
        ...

    async def get_by_id(
        self, location_id: LocationId, tenant_id: str
    ) -> Location | None:
        ...

    async def list_for_tenant(self, tenant_id: str) -> list[Location]:
        ...

    async def delete(self, location: Location) -> bool:
        ...


@runtime_checkable
class IShiftRepository(Protocol):
    """Repository for Shift aggregate persistence."""

    async def save(self, shift: Shift) -> None:
        """Persist a shift (insert or update).

        Raises:
            ShiftConflictError: If the shift overlaps another shift of the
                same member
        """
        ...

    async def get_by_id(self, shift_id: ShiftId, tenant_id: str) -> Shift | None:
        ...

    async def list_for_tenant(
        self,
        tenant_id: str,
        window_start: datetime | None = None,
        window_end: datetime | None = None,
    ) -> list[Shift]:
        """List a tenant's shifts overlapping the window, by start time."""
        ...

    async def delete(self, shift: Shift) -> bool:
        ...


@runtime_checkable
class IShiftTemplateRepository(Protocol):
    """Repository for ShiftTemplate aggregate persistence."""

    async def save(self, template: ShiftTemplate) -> None:
        ...

    async def get_by_id(
        self, template_id: ShiftTemplateId, tenant_id: str
    ) -> ShiftTemplate | None:
        ...

    async def list_for_tenant(self, tenant_id: str) -> list[ShiftTemplate]:
        ...

    async def delete(self, template: ShiftTemplate) -> bool:
        ...


@runtime_checkable
class IMemberReferenceChecker(Protocol):
    """Checks that a membership identifier belongs to a tenant."""

    async def exists(self, membership_id: str, tenant_id: str) -> bool:
        ...
