"""Membership management application service.

All operations act on the active tenant of a resolved tenant context and
re-check, inside their own transaction, that the actor still belongs to
that tenant. The context may be a few milliseconds old; a membership
revoked in between must not let the mutation through.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultMembershipServiceProbe,
    MembershipServiceProbe,
)
from iam.application.value_objects import MemberRemoval
from iam.domain.aggregates import Membership
from iam.domain.value_objects import MemberListing, MembershipId, PrincipalId, TenantId
from iam.ports.exceptions import (
    MembershipNotFoundError,
    RoleNotInTenantError,
    UnauthorizedError,
)
from iam.ports.repositories import IMembershipRepository, IRoleReferenceChecker
from shared_kernel.invalidation import InvalidationScope, TenantInvalidationPublisher
from shared_kernel.middleware.tenant_context import TenantContext


class MembershipService:
    """Application service for managing the members of the active tenant."""

    def __init__(
        self,
        session: AsyncSession,
        membership_repository: IMembershipRepository,
        role_reference_checker: IRoleReferenceChecker,
        invalidation_publisher: TenantInvalidationPublisher,
        probe: MembershipServiceProbe | None = None,
    ):
        self._session = session
        self._membership_repository = membership_repository
        self._role_reference_checker = role_reference_checker
        self._invalidation_publisher = invalidation_publisher
        self._probe = probe or DefaultMembershipServiceProbe()

    async def list_members(self, context: TenantContext) -> list[MemberListing]:
        """List the members of the active tenant."""
        members = await self._membership_repository.list_members(
            TenantId(value=context.tenant_id)
        )
        self._probe.members_listed(context.tenant_id, len(members))
        return members

    async def update_member(
        self,
        context: TenantContext,
        membership_id: str,
        display_name: str | None,
        role_id: str | None,
    ) -> Membership:
        """Change a member's display name and role.

        Raises:
            UnauthorizedError: If the actor no longer belongs to the tenant
            MembershipNotFoundError: If the membership is not in the tenant
            RoleNotInTenantError: If the role is not defined in the tenant
        """
        tenant_id = TenantId(value=context.tenant_id)
        mid = _parse_membership_id(membership_id)

        async with self._session.begin():
            await self._ensure_actor_is_member(context)

            membership = await self._membership_repository.get_by_id(mid, tenant_id)
            if membership is None:
                raise MembershipNotFoundError(membership_id)

            if role_id is not None and not await self._role_reference_checker.exists(
                role_id, tenant_id.value
            ):
                raise RoleNotInTenantError(role_id)

            membership.update(display_name=display_name, role_id=role_id)
            await self._membership_repository.save(membership)
            await self._invalidation_publisher.publish(
                tenant_id.value, InvalidationScope.MEMBERSHIP
            )

        self._probe.member_updated(tenant_id.value, membership.id.value)
        return membership

    async def remove_member(
        self, context: TenantContext, membership_id: str
    ) -> MemberRemoval:
        """Remove a member from the active tenant.

        Returns:
            MemberRemoval telling whether the actor removed themself

        Raises:
            UnauthorizedError: If the actor no longer belongs to the tenant
            MembershipNotFoundError: If the membership is not in the tenant
        """
        tenant_id = TenantId(value=context.tenant_id)
        mid = _parse_membership_id(membership_id)

        async with self._session.begin():
            await self._ensure_actor_is_member(context)

            membership = await self._membership_repository.get_by_id(mid, tenant_id)
            if membership is None:
                raise MembershipNotFoundError(membership_id)

            await self._membership_repository.delete(membership)
            await self._invalidation_publisher.publish(
                tenant_id.value, InvalidationScope.MEMBERSHIP
            )

        removed_self = membership.principal_id.value == context.principal.id
        self._probe.member_removed(tenant_id.value, mid.value, removed_self)
        return MemberRemoval(membership_id=mid.value, removed_self=removed_self)

    async def _ensure_actor_is_member(self, context: TenantContext) -> None:
        is_member = await self._membership_repository.exists(
            PrincipalId(value=context.principal.id),
            TenantId(value=context.tenant_id),
        )
        if not is_member:
            self._probe.actor_membership_revoked(
                context.tenant_id, context.principal.id
            )
            raise UnauthorizedError()


def _parse_membership_id(membership_id: str) -> MembershipId:
    try:
        return MembershipId.from_string(membership_id)
    except ValueError as e:
        raise MembershipNotFoundError(membership_id) from e
