"""Value objects for the organization domain."""

from __future__ import annotations

from dataclasses import dataclass

from ulid import ULID


def _canonical_ulid(value: object, kind: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Invalid {kind}: {value!r}")
    try:
        return str(ULID.from_str(value.upper()))
    except ValueError as e:
        raise ValueError(f"Invalid {kind}: {value}") from e


@dataclass(frozen=True)
class RoleId:
    """Identifier for a Role aggregate."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> RoleId:
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> RoleId:
        """Create RoleId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        return cls(value=_canonical_ulid(value, "RoleId"))


@dataclass(frozen=True)
class LocationId:
    """Identifier for a Location aggregate."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> LocationId:
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> LocationId:
        """Create LocationId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        return cls(value=_canonical_ulid(value, "LocationId"))


@dataclass(frozen=True)
class ShiftId:
    """Identifier for a Shift aggregate."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> ShiftId:
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> ShiftId:
        return cls(value=_canonical_ulid(value, "ShiftId"))


@dataclass(frozen=True)
class ShiftTemplateId:
    """Identifier for a ShiftTemplate aggregate."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> ShiftTemplateId:
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> ShiftTemplateId:
        return cls(value=_canonical_ulid(value, "ShiftTemplateId"))
