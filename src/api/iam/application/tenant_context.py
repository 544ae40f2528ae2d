"""Tenant context resolution.

Determines, for one request, which tenant the caller operates against.
Resolution combines three inputs:

1. the principal reported by the identity provider,
2. the principal's current memberships, read fresh from the store,
3. the advisory active-tenant preference stored on the client.

The decision itself is the pure function ``reconcile_tenant_context``;
``TenantContextResolver`` gathers its inputs and maps collaborator
failures to ``TransientFailure``. Resolution only reads: it never writes
the preference, even when the preference turns out to be stale.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from iam.domain.value_objects import PrincipalId
from iam.ports.exceptions import InvalidPreferenceError
from iam.ports.identity import IdentityProvider, PreferenceCodec
from iam.ports.repositories import IMembershipRepository
from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import (
    NoTenant,
    NotAuthenticated,
    Principal,
    TenantContext,
    TenantResolution,
    TenantSummary,
    TransientFailure,
)


def reconcile_tenant_context(
    principal: Principal | None,
    tenants: Sequence[TenantSummary],
    preferred_tenant_id: str | None,
) -> TenantResolution:
    """Choose the active tenant from identity, memberships and preference.

    Args:
        principal: The authenticated principal, or None
        tenants: The principal's tenants in membership order
        preferred_tenant_id: Tenant id from a verified preference, if any

    Returns:
        NotAuthenticated, NoTenant, or a TenantContext whose source tells
        whether the preference was honoured ('preference'), absent
        ('default') or stale ('fallback')
    """
    if principal is None:
        return NotAuthenticated()

    all_tenants = tuple(tenants)
    if not all_tenants:
        return NoTenant(principal=principal)

    if preferred_tenant_id is not None:
        for tenant in all_tenants:
            if tenant.id == preferred_tenant_id:
                return TenantContext(
                    principal=principal,
                    active_tenant=tenant,
                    all_tenants=all_tenants,
                    source="preference",
                )
        return TenantContext(
            principal=principal,
            active_tenant=all_tenants[0],
            all_tenants=all_tenants,
            source="fallback",
        )

    return TenantContext(
        principal=principal,
        active_tenant=all_tenants[0],
        all_tenants=all_tenants,
        source="default",
    )


class TenantContextResolver:
    """Resolves the tenant context of a request.

    The identity lookup always completes before memberships are read, and
    the membership query is filtered by the resolved principal. Any
    exception raised by a collaborator becomes a ``TransientFailure``; it
    is never reported as "not signed in" or "no company".
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        membership_repository: IMembershipRepository,
        preference_codec: PreferenceCodec,
        probe: TenantContextProbe | None = None,
    ) -> None:
        self._identity_provider = identity_provider
        self._membership_repository = membership_repository
        self._preference_codec = preference_codec
        self._probe = probe or DefaultTenantContextProbe()

    async def resolve(
        self,
        token: str | None,
        raw_preference: str | None,
    ) -> TenantResolution:
        """Resolve the tenant context for one request.

        Args:
            token: The access token presented by the caller, if any
            raw_preference: The raw active-tenant preference value, if any

        Returns:
            One of TenantContext, NotAuthenticated, NoTenant or
            TransientFailure
        """
        try:
            principal = await self._identity_provider.get_principal(token)
        except Exception as e:
            self._probe.collaborator_failed("identity", e)
            return TransientFailure(collaborator="identity", error_type=type(e).__name__)

        if principal is None:
            self._probe.not_authenticated()
            return NotAuthenticated()

        try:
            views = await self._membership_repository.list_tenants_for_principal(
                PrincipalId(value=principal.id)
            )
        except Exception as e:
            self._probe.collaborator_failed("membership", e, principal_id=principal.id)
            return TransientFailure(
                collaborator="membership", error_type=type(e).__name__
            )

        tenants = [TenantSummary(id=v.tenant_id, name=v.tenant_name) for v in views]
        preferred_tenant_id, rejected = self._read_preference(
            raw_preference, principal.id
        )

        resolution = reconcile_tenant_context(principal, tenants, preferred_tenant_id)

        match resolution:
            case NoTenant():
                self._probe.no_tenant_membership(principal.id)
            case TenantContext(source="preference"):
                self._probe.tenant_resolved_from_preference(
                    resolution.tenant_id, principal.id
                )
            case TenantContext(source="fallback"):
                self._probe.stale_preference_discarded(
                    preferred_tenant_id=preferred_tenant_id or "",
                    fallback_tenant_id=resolution.tenant_id,
                    principal_id=principal.id,
                )
            case TenantContext(source="default") if rejected:
                # A present but untrustworthy preference is discarded, not absent
                resolution = replace(resolution, source="fallback")
            case TenantContext(source="default"):
                self._probe.tenant_resolved_from_default(
                    resolution.tenant_id, principal.id
                )

        return resolution

    def _read_preference(
        self, raw_preference: str | None, principal_id: str
    ) -> tuple[str | None, bool]:
        """Decode the preference, returning (tenant id, rejected)."""
        if not raw_preference:
            return None, False
        try:
            return self._preference_codec.decode(raw_preference, principal_id), False
        except InvalidPreferenceError as e:
            self._probe.preference_rejected(principal_id, e.reason)
            return None, True
