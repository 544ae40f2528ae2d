"""Value objects for tenant-scoped invalidation signals.

An invalidation signal tells subscribers that data of a given scope
changed for a tenant, so any cached view of it must be refetched. Signals
carry no payload beyond the tenant and the scope.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class InvalidationScope(StrEnum):
    """Kinds of tenant data whose views can be invalidated."""

    TENANT = "tenant"
    MEMBERSHIP = "membership"
    ROLE = "role"
    LOCATION = "location"
    SHIFT = "shift"
    ITEM = "item"


class InvalidSignalPayloadError(ValueError):
    """Raised when a serialized signal cannot be decoded."""


@dataclass(frozen=True)
class InvalidationSignal:
    """A single tenant-scoped invalidation.

    Attributes:
        tenant_id: Tenant whose data changed
        scope: Which kind of data changed
    """

    tenant_id: str
    scope: InvalidationScope

    def to_payload(self) -> str:
        """Serialize to the JSON text sent over the notification channel."""
        return json.dumps({"tenant_id": self.tenant_id, "scope": self.scope.value})

    def to_dict(self) -> dict[str, Any]:
        return {"tenant_id": self.tenant_id, "scope": self.scope.value}

    @classmethod
    def from_payload(cls, payload: str) -> InvalidationSignal:
        """Parse a notification payload.

        Raises:
            InvalidSignalPayloadError: If the payload is not a JSON object
                with a non-empty tenant_id and a known scope.
        """
        try:
            data = json.loads(payload)
        except (TypeError, json.JSONDecodeError) as e:
            raise InvalidSignalPayloadError(f"Payload is not JSON: {e}") from e

        if not isinstance(data, dict):
            raise InvalidSignalPayloadError("Payload is not a JSON object")

        tenant_id = data.get("tenant_id")
        if not isinstance(tenant_id, str) or not tenant_id:
            raise InvalidSignalPayloadError("Missing tenant_id")

        try:
            scope = InvalidationScope(data.get("scope"))
        except ValueError as e:
            raise InvalidSignalPayloadError(
                f"Unknown scope: {data.get('scope')!r}"
            ) from e

        return cls(tenant_id=tenant_id, scope=scope)
