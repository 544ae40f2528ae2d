"""Role management application service.

Roles are scoped to the active tenant of the caller's resolved context.
Mutations re-check the actor's membership through the shared
``MembershipChecker`` port inside their own transaction.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from organization.application.observability import (
    DefaultRoleServiceProbe,
    RoleServiceProbe,
)
from organization.domain.aggregates import Role
from organization.domain.value_objects import RoleId
from organization.ports.exceptions import RoleNotFoundError
from organization.ports.repositories import IRoleRepository
from shared_kernel.invalidation import InvalidationScope, TenantInvalidationPublisher
from shared_kernel.membership import MembershipChecker, MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext


class RoleService:
    """Application service for a tenant's roles."""

    def __init__(
        self,
        session: AsyncSession,
        role_repository: IRoleRepository,
        membership_checker: MembershipChecker,
        invalidation_publisher: TenantInvalidationPublisher,
        probe: RoleServiceProbe | None = None,
    ):
        self._session = session
        self._role_repository = role_repository
        self._membership_checker = membership_checker
        self._invalidation_publisher = invalidation_publisher
        self._probe = probe or DefaultRoleServiceProbe()

    async def list(self, context: TenantContext) -> list[Role]:
        """List the roles of the active tenant."""
        roles = await self._role_repository.list_for_tenant(context.tenant_id)
        self._probe.roles_listed(context.tenant_id, len(roles))
        return roles

    async def create(self, context: TenantContext, name: str) -> Role:
        """Create a role in the active tenant.

        Raises:
            InvalidRoleNameError: If the name is empty or too long
            MembershipRevokedError: If the actor left the tenant
        """
        role = Role.create(tenant_id=context.tenant_id, name=name)

        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            await self._role_repository.save(role)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.ROLE
            )

        self._probe.role_created(context.tenant_id, role.id.value, role.name)
        return role

    async def rename(self, context: TenantContext, role_id: str, name: str) -> Role:
        """Rename a role of the active tenant.

        Raises:
            RoleNotFoundError: If the role is not in the active tenant
            InvalidRoleNameError: If the name is empty or too long
            MembershipRevokedError: If the actor left the tenant
        """
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            role = await self._load(context, role_id)
            role.rename(name)
            await self._role_repository.save(role)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.ROLE
            )

        self._probe.role_renamed(context.tenant_id, role.id.value, role.name)
        return role

    async def delete(self, context: TenantContext, role_id: str) -> None:
        """Delete a role of the active tenant.

        Raises:
            RoleNotFoundError: If the role is not in the active tenant
            MembershipRevokedError: If the actor left the tenant
        """
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            role = await self._load(context, role_id)
            await self._role_repository.delete(role)
            # Members holding the role are detached by the database
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.ROLE
            )
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.MEMBERSHIP
            )

        self._probe.role_deleted(context.tenant_id, role.id.value)

    async def _load(self, context: TenantContext, role_id: str) -> Role:
        try:
            rid = RoleId.from_string(role_id)
        except ValueError as e:
            self._probe.role_not_found(context.tenant_id, role_id)
            raise RoleNotFoundError(role_id) from e

        role = await self._role_repository.get_by_id(rid, context.tenant_id)
        if role is None:
            self._probe.role_not_found(context.tenant_id, rid.value)
            raise RoleNotFoundError(role_id)
        return role

    async def _ensure_actor_is_member(self, context: TenantContext) -> None:
        if not await self._membership_checker.is_member(
            context.principal.id, context.tenant_id
        ):
            self._probe.actor_membership_revoked(
                context.tenant_id, context.principal.id
            )
            raise MembershipRevokedError()
