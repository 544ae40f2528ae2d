"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ulid import ULID

MAX_PRINCIPAL_ID_LENGTH = 255


@dataclass(frozen=True)
class TenantId:
    """Identifier for a Tenant aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> TenantId:
        """Generate a new TenantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from string value.

        Args:
            value: ULID string

        Returns:
            TenantId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        if not isinstance(value, str):
            raise ValueError(f"Invalid TenantId: {value!r}")
        try:
            parsed = ULID.from_str(value.upper())
        except ValueError as e:
            raise ValueError(f"Invalid TenantId: {value}") from e

        # Canonical uppercase form so lookups compare equal
        return cls(value=str(parsed))


@dataclass(frozen=True)
class MembershipId:
    """Identifier for a Membership aggregate."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> MembershipId:
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> MembershipId:
        """Create MembershipId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        if not isinstance(value, str):
            raise ValueError(f"Invalid MembershipId: {value!r}")
        try:
            parsed = ULID.from_str(value.upper())
        except ValueError as e:
            raise ValueError(f"Invalid MembershipId: {value}") from e

        # Canonical uppercase form so lookups compare equal
        return cls(value=str(parsed))


@dataclass(frozen=True)
class PrincipalId:
    """Identifier for an authenticated principal.

    Principal identifiers are issued by the external identity provider and
    are opaque to this service; they are not ULIDs.
    """

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> PrincipalId:
        """Create PrincipalId from the identity provider's subject.

        Raises:
            ValueError: If value is empty or too long
        """
        if not value or len(value) > MAX_PRINCIPAL_ID_LENGTH:
            raise ValueError(f"Invalid PrincipalId: {value!r}")
        return cls(value=value)


@dataclass(frozen=True)
class MembershipView:
    """A principal's membership joined with the tenant it points at.

    Produced by the membership store when listing a principal's tenants.
    Lists are ordered by ``created_at`` then ``membership_id``.
    """

    membership_id: str
    principal_id: str
    tenant_id: str
    tenant_name: str
    role_id: str | None
    created_at: datetime


@dataclass(frozen=True)
class MemberListing:
    """A member of a tenant as shown to other members of that tenant."""

    membership_id: str
    principal_id: str
    display_name: str | None
    email: str | None
    role_id: str | None
    created_at: datetime
