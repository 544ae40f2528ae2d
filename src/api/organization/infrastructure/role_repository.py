"""PostgreSQL implementation of IRoleRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from organization.domain.aggregates import Role
from organization.domain.value_objects import RoleId
from organization.infrastructure.models import RoleModel
from organization.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    OrganizationRepositoryProbe,
)
from organization.ports.repositories import IRoleRepository


class RoleRepository(IRoleRepository):
    """Repository managing PostgreSQL storage for Role aggregates.

    Every query filters on ``tenant_id``; a role id from another tenant
    is indistinguishable from a missing one.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: OrganizationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultOrganizationRepositoryProbe()

    async def save(self, role: Role) -> None:
        model = await self._get_model(role.id.value, role.tenant_id)

        if model:
            model.name = role.name
        else:
            self._session.add(
                RoleModel(id=role.id.value, tenant_id=role.tenant_id, name=role.name)
            )

        await self._session.flush()
        self._probe.entity_saved("role", role.id.value, role.tenant_id)

    async def get_by_id(self, role_id: RoleId, tenant_id: str) -> Role | None:
        model = await self._get_model(role_id.value, tenant_id)
        if model is None:
            return None
        return self._to_domain(model)

    async def list_for_tenant(self, tenant_id: str) -> list[Role]:
        stmt = (
            select(RoleModel)
            .where(RoleModel.tenant_id == tenant_id)
            .order_by(RoleModel.name, RoleModel.id)
        )
        result = await self._session.execute(stmt)
        roles = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.entities_listed("role", tenant_id, len(roles))
        return roles

    async def delete(self, role: Role) -> bool:
        model = await self._get_model(role.id.value, role.tenant_id)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.entity_deleted("role", role.id.value, role.tenant_id)
        return True

    async def _get_model(self, role_id: str, tenant_id: str) -> RoleModel | None:
        stmt = select(RoleModel).where(
            RoleModel.id == role_id,
            RoleModel.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: RoleModel) -> Role:
        return Role(
            id=RoleId(value=model.id),
            tenant_id=model.tenant_id,
            name=model.name,
        )
