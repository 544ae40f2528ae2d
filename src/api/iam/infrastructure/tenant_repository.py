"""PostgreSQL implementation of ITenantRepository.

Tenants are simple aggregates stored in a single table. Deleting a tenant
relies on the database's cascading foreign keys to remove everything
scoped to it.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Tenant
from iam.domain.value_objects import TenantId
from iam.infrastructure.models import TenantModel
from iam.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from iam.ports.repositories import ITenantRepository


class TenantRepository(ITenantRepository):
    """Repository managing PostgreSQL storage for Tenant aggregates.

    The repository never opens transactions itself; it runs inside the
    caller's unit of work.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def save(self, tenant: Tenant) -> None:
        """Persist tenant metadata to PostgreSQL.

        Args:
            tenant: The Tenant aggregate to persist
        """
        stmt = select(TenantModel).where(TenantModel.id == tenant.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.name = tenant.name
        else:
            model = TenantModel(
                id=tenant.id.value,
                name=tenant.name,
            )
            self._session.add(model)

        # Flush so dependent rows (memberships) can reference the tenant
        await self._session.flush()
        self._probe.tenant_saved(tenant.id.value)

    async def get_by_id(self, tenant_id: TenantId) -> Tenant | None:
        """Fetch tenant metadata from PostgreSQL.

        Args:
            tenant_id: The unique identifier of the tenant

        Returns:
            The Tenant aggregate, or None if not found
        """
        stmt = select(TenantModel).where(TenantModel.id == tenant_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        tenant = Tenant(
            id=TenantId(value=model.id),
            name=model.name,
        )

        self._probe.tenant_retrieved(tenant.id.value)
        return tenant

    async def delete(self, tenant: Tenant) -> bool:
        """Delete tenant from PostgreSQL.

        Memberships, roles and locations go with it through ON DELETE
        CASCADE.

        Args:
            tenant: The Tenant aggregate to delete

        Returns:
            True if deleted, False if not found
        """
        stmt = select(TenantModel).where(TenantModel.id == tenant.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.tenant_deleted(tenant.id.value)
        return True
