"""PostgreSQL implementation of ILocationRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from organization.domain.aggregates import Location
from organization.domain.value_objects import LocationId
from organization.infrastructure.models import LocationModel
from organization.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    OrganizationRepositoryProbe,
)
from organization.ports.repositories import ILocationRepository


class LocationRepository(ILocationRepository):
    """Repository managing PostgreSQL storage for Location aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: OrganizationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultOrganizationRepositoryProbe()

    async def save(self, location: Location) -> None:
        model = await self._get_model(location.id.value, location.tenant_id)

        if model:
            model.name = location.name
        else:
            self._session.add(
                LocationModel(
                    id=location.id.value,
                    tenant_id=location.tenant_id,
                    name=location.name,
                )
            )

        await self._session.flush()
        self._probe.entity_saved("location", location.id.value, location.tenant_id)

    async def get_by_id(
        self, location_id: LocationId, tenant_id: str
    ) -> Location | None:
        model = await self._get_model(location_id.value, tenant_id)
        if model is None:
            return None
        return self._to_domain(model)

    async def list_for_tenant(self, tenant_id: str) -> list[Location]:
        stmt = (
            select(LocationModel)
            .where(LocationModel.tenant_id == tenant_id)
            .order_by(LocationModel.name, LocationModel.id)
        )
        result = await self._session.execute(stmt)
        locations = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.entities_listed("location", tenant_id, len(locations))
        return locations

    async def delete(self, location: Location) -> bool:
        model = await self._get_model(location.id.value, location.tenant_id)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.entity_deleted("location", location.id.value, location.tenant_id)
        return True

    async def _get_model(
        self, location_id: str, tenant_id: str
    ) -> LocationModel | None:
        stmt = select(LocationModel).where(
            LocationModel.id == location_id,
            LocationModel.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: LocationModel) -> Location:
        return Location(
            id=LocationId(value=model.id),
            tenant_id=model.tenant_id,
            name=model.name,
        )
