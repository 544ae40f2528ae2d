"""Tenant context result types.

This module contains the pure value objects describing the outcome of
resolving the active tenant for a request. They are framework-agnostic
and shared by every bounded context that scopes data by tenant.

Resolution never raises for routine outcomes. Callers receive one of the
variants of ``TenantResolution`` and branch on it with ``match``:

    match resolution:
        case TenantContext():
            ...
        case NotAuthenticated():
            ...  # redirect to sign-in
        case NoTenant():
            ...  # redirect to tenant onboarding
        case TransientFailure():
            ...  # generic "try again"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias


@dataclass(frozen=True)
class Principal:
    """An authenticated identity as reported by the identity provider.

    Attributes:
        id: Stable subject identifier issued by the identity provider.
        email: Contact address, if the provider supplied one.
        display_name: Human-readable name, if the provider supplied one.
    """

    id: str
    email: str | None = None
    display_name: str | None = None

    @property
    def label(self) -> str:
        """Best available human-readable name for the principal."""
        return self.display_name or self.email or self.id


@dataclass(frozen=True)
class TenantSummary:
    """Identifier and name of a tenant the principal belongs to."""

    id: str
    name: str


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        principal: The authenticated principal.
        active_tenant: The tenant this request operates against. Always an
            element of ``all_tenants``.
        all_tenants: Every tenant the principal currently belongs to,
            ordered by membership creation. Never empty.
        source: How the active tenant was chosen:
            'preference' if the stored preference was honoured,
            'default' if no preference was stored,
            'fallback' if a stored preference was discarded as stale.
    """

    principal: Principal
    active_tenant: TenantSummary
    all_tenants: tuple[TenantSummary, ...]
    source: Literal["preference", "default", "fallback"]

    def __post_init__(self) -> None:
        if not self.all_tenants:
            raise ValueError("TenantContext requires at least one tenant")
        if self.active_tenant not in self.all_tenants:
            raise ValueError("active_tenant must be one of all_tenants")

    @property
    def tenant_id(self) -> str:
        """Shortcut for the active tenant's identifier."""
        return self.active_tenant.id


@dataclass(frozen=True)
class NotAuthenticated:
    """No valid identity assertion accompanied the request."""


@dataclass(frozen=True)
class NoTenant:
    """The principal is authenticated but belongs to no tenant yet."""

    principal: Principal


@dataclass(frozen=True)
class AuthorizationDenied:
    """The principal may not act on the requested tenant.

    Attributes:
        reason: Human-readable denial message. Never names other tenants.
        clear_preference: Whether the stored active-tenant preference
            pointed at the rejected tenant and should be cleared.
    """

    reason: str
    clear_preference: bool = False


@dataclass(frozen=True)
class TransientFailure:
    """A collaborator (identity provider or membership store) failed.

    Distinct from ``NotAuthenticated`` and ``NoTenant``: the request could
    not be verified at all and should be retried later.

    Attributes:
        collaborator: Which collaborator failed ('identity' or 'membership').
        error_type: Class name of the underlying error, for diagnostics.
    """

    collaborator: Literal["identity", "membership"]
    error_type: str


TenantResolution: TypeAlias = (
    TenantContext | NotAuthenticated | NoTenant | TransientFailure
)
