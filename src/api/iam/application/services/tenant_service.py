"""Tenant application service for IAM bounded context.

Handles tenant lifecycle operations: creating a tenant together with its
first membership, listing a principal's tenants and deleting a tenant.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultTenantServiceProbe, TenantServiceProbe
from iam.domain.aggregates import Membership, Tenant
from iam.domain.aggregates.membership import MAX_DISPLAY_NAME_LENGTH
from iam.domain.value_objects import MembershipView, PrincipalId, TenantId
from iam.ports.exceptions import TenantLimitReachedError, UnauthorizedError
from iam.ports.repositories import (
    IMembershipRepository,
    IPrincipalRepository,
    ITenantRepository,
)
from shared_kernel.invalidation import InvalidationScope, TenantInvalidationPublisher
from shared_kernel.middleware.tenant_context import Principal

DEFAULT_MAX_TENANTS_PER_PRINCIPAL = 5


class TenantService:
    """Application service for tenant lifecycle management.

    Every operation runs in a single transaction on the write session.
    Invalidation signals are published inside that transaction so they
    are only delivered if it commits.
    """

    def __init__(
        self,
        session: AsyncSession,
        tenant_repository: ITenantRepository,
        membership_repository: IMembershipRepository,
        principal_repository: IPrincipalRepository,
        invalidation_publisher: TenantInvalidationPublisher,
        probe: TenantServiceProbe | None = None,
        max_tenants_per_principal: int = DEFAULT_MAX_TENANTS_PER_PRINCIPAL,
    ):
        """Initialize TenantService with dependencies.

        Args:
            session: Database session for transaction management
            tenant_repository: Repository for tenant persistence
            membership_repository: Repository for membership persistence
            principal_repository: Mirror of identity provider principals
            invalidation_publisher: Publisher for tenant invalidations
            probe: Optional domain probe for observability
            max_tenants_per_principal: Self-service creation cap
        """
        self._session = session
        self._tenant_repository = tenant_repository
        self._membership_repository = membership_repository
        self._principal_repository = principal_repository
        self._invalidation_publisher = invalidation_publisher
        self._probe = probe or DefaultTenantServiceProbe()
        self._max_tenants = max_tenants_per_principal

    async def create_tenant(self, name: str, principal: Principal) -> Tenant:
        """Create a tenant with the principal as its first member.

        The principal may have no tenant yet; this is how onboarding ends.

        Args:
            name: The name of the tenant
            principal: The authenticated creator

        Returns:
            The created Tenant aggregate

        Raises:
            InvalidTenantNameError: If the name is empty or too long
            TenantLimitReachedError: If the principal is at the cap
        """
        tenant = Tenant.create(name=name)
        principal_id = PrincipalId(value=principal.id)

        async with self._session.begin():
            await self._principal_repository.ensure(principal)

            count = await self._membership_repository.count_for_principal(
                principal_id
            )
            if count >= self._max_tenants:
                self._probe.tenant_limit_reached(principal.id, self._max_tenants)
                raise TenantLimitReachedError(self._max_tenants)

            await self._tenant_repository.save(tenant)

            membership = Membership.create(
                tenant_id=tenant.id,
                principal_id=principal_id,
                display_name=_initial_display_name(principal),
            )
            await self._membership_repository.save(membership)

            await self._invalidation_publisher.publish(
                tenant.id.value, InvalidationScope.TENANT
            )

        self._probe.tenant_created(
            tenant_id=tenant.id.value,
            name=tenant.name,
            principal_id=principal.id,
        )
        return tenant

    async def list_tenants(self, principal: Principal) -> list[MembershipView]:
        """List the principal's tenants in membership order."""
        views = await self._membership_repository.list_tenants_for_principal(
            PrincipalId(value=principal.id)
        )
        self._probe.tenants_listed(principal.id, len(views))
        return views

    async def delete_tenant(self, tenant_id: str, principal: Principal) -> None:
        """Delete a tenant the principal belongs to.

        Membership is re-checked inside the deleting transaction. A
        missing tenant and a tenant the principal does not belong to are
        reported identically.

        Args:
            tenant_id: The tenant to delete
            principal: The authenticated principal

        Raises:
            UnauthorizedError: If the principal is not a member or the
                tenant does not exist
        """
        try:
            tid = TenantId.from_string(tenant_id)
        except ValueError as e:
            self._probe.tenant_access_denied(tenant_id, principal.id)
            raise UnauthorizedError() from e

        async with self._session.begin():
            is_member = await self._membership_repository.exists(
                PrincipalId(value=principal.id), tid
            )
            if not is_member:
                self._probe.tenant_access_denied(tid.value, principal.id)
                raise UnauthorizedError()

            tenant = await self._tenant_repository.get_by_id(tid)
            if tenant is None:
                self._probe.tenant_access_denied(tid.value, principal.id)
                raise UnauthorizedError()

            await self._tenant_repository.delete(tenant)
            await self._invalidation_publisher.publish(
                tid.value, InvalidationScope.TENANT
            )

        self._probe.tenant_deleted(tid.value, principal.id)


def _initial_display_name(principal: Principal) -> str | None:
    name = principal.display_name or principal.email
    if not name:
        return None
    return name[:MAX_DISPLAY_NAME_LENGTH]
