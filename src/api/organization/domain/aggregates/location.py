"""Location aggregate for the organization context."""

from __future__ import annotations

from dataclasses import dataclass

from organization.domain.exceptions import InvalidLocationNameError
from organization.domain.value_objects import LocationId

MAX_LOCATION_NAME_LENGTH = 100


@dataclass
class Location:
    """A physical site of a tenant where shifts take place."""

    id: LocationId
    tenant_id: str
    name: str

    @classmethod
    def create(cls, tenant_id: str, name: str) -> Location:
        """Create a new location in a tenant.

        Raises:
            InvalidLocationNameError: If the name is empty or too long
        """
        return cls(
            id=LocationId.generate(), tenant_id=tenant_id, name=_clean_name(name)
        )

    def rename(self, name: str) -> None:
        self.name = _clean_name(name)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidLocationNameError("Location name is required")
    if len(cleaned) > MAX_LOCATION_NAME_LENGTH:
        raise InvalidLocationNameError(
            f"Location name must be at most {MAX_LOCATION_NAME_LENGTH} characters"
        )
    return cleaned
