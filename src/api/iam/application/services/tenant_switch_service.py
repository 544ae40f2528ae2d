"""Tenant switch application service.

Validates a request to change the active tenant. Writing the preference
itself is left to the presentation layer, which owns the cookie.
"""

from __future__ import annotations

from iam.application.value_objects import TenantSwitched, TenantSwitchUnchanged
from iam.domain.value_objects import PrincipalId, TenantId
from iam.ports.exceptions import TenantAccessVerificationError
from iam.ports.repositories import IMembershipRepository
from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import AuthorizationDenied, Principal

SWITCH_DENIED_MESSAGE = "You do not have access to this company."

SwitchOutcome = TenantSwitched | TenantSwitchUnchanged | AuthorizationDenied


class TenantSwitchService:
    """Decides whether a principal may make a tenant active.

    The same denial is returned whether the tenant does not exist or the
    principal is not a member, so the response never reveals which.
    """

    def __init__(
        self,
        membership_repository: IMembershipRepository,
        probe: TenantContextProbe | None = None,
    ) -> None:
        self._membership_repository = membership_repository
        self._probe = probe or DefaultTenantContextProbe()

    async def switch(
        self,
        principal: Principal,
        requested_tenant_id: str,
        current_preference: str | None,
    ) -> SwitchOutcome:
        """Validate a switch of the active tenant.

        Args:
            principal: The authenticated principal
            requested_tenant_id: The tenant the principal wants to activate
            current_preference: Tenant id of the principal's verified
                preference, or None if there is none

        Returns:
            TenantSwitched if a new preference must be written,
            TenantSwitchUnchanged if the tenant is already preferred,
            AuthorizationDenied otherwise

        Raises:
            TenantAccessVerificationError: If membership could not be read
        """
        try:
            tenant_id = TenantId.from_string(requested_tenant_id)
        except ValueError:
            return self._deny(principal, requested_tenant_id, current_preference)

        try:
            is_member = await self._membership_repository.exists(
                PrincipalId(value=principal.id), tenant_id
            )
        except Exception as e:
            self._probe.collaborator_failed("membership", e, principal_id=principal.id)
            raise TenantAccessVerificationError("membership", type(e).__name__) from e

        if not is_member:
            return self._deny(principal, tenant_id.value, current_preference)

        if current_preference == tenant_id.value:
            self._probe.tenant_switch_unchanged(tenant_id.value, principal.id)
            return TenantSwitchUnchanged(tenant_id=tenant_id.value)

        self._probe.tenant_switched(tenant_id.value, principal.id)
        return TenantSwitched(tenant_id=tenant_id.value)

    def _deny(
        self,
        principal: Principal,
        requested_tenant_id: str,
        current_preference: str | None,
    ) -> AuthorizationDenied:
        clear_preference = current_preference == requested_tenant_id
        self._probe.tenant_switch_denied(
            requested_tenant_id=requested_tenant_id,
            principal_id=principal.id,
            preference_cleared=clear_preference,
        )
        return AuthorizationDenied(
            reason=SWITCH_DENIED_MESSAGE, clear_preference=clear_preference
        )
