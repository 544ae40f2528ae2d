"""Ports for the external identity and preference collaborators."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.middleware.tenant_context import Principal


@runtime_checkable
class IdentityProvider(Protocol):
    """Answers "who is making this request?".

    Implementations return None for a missing, malformed, expired or
    otherwise invalid credential. They raise only when the provider
    itself cannot be consulted, which callers treat as transient.
    """

    async def get_principal(self, token: str | None) -> Principal | None:
        """Resolve the principal for an access token."""
        ...


@runtime_checkable
class PreferenceCodec(Protocol):
    """Encodes and verifies the active-tenant preference.

    The preference is advisory: a decoded value is only a hint and is
    always checked against the principal's current memberships.
    """

    def encode(self, principal_id: str, tenant_id: str) -> str:
        """Produce a signed preference value bound to the principal."""
        ...

    def decode(self, raw: str, principal_id: str) -> str:
        """Return the preferred tenant id.

        Raises:
            InvalidPreferenceError: If the value is malformed, tampered
                with, expired or issued to another principal
        """
        ...
