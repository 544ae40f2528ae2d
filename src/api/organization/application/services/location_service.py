"""Location management application service."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from organization.application.observability import (
    DefaultLocationServiceProbe,
    LocationServiceProbe,
)
from organization.domain.aggregates import Location
from organization.domain.value_objects import LocationId
from organization.ports.exceptions import LocationNotFoundError
from organization.ports.repositories import ILocationRepository
from shared_kernel.invalidation import InvalidationScope, TenantInvalidationPublisher
from shared_kernel.membership import MembershipChecker, MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext


class LocationService:
    """Application service for a tenant's locations.

    Same contract as RoleService: reads are scoped to the active tenant
    and every mutation re-checks the actor's membership first.
    """

    def __init__(
        self,
        session: AsyncSession,
        location_repository: ILocationRepository,
        membership_checker: MembershipChecker,
        invalidation_publisher: TenantInvalidationPublisher,
        probe: LocationServiceProbe | None = None,
    ):
        self._session = session
        self._location_repository = location_repository
        self._membership_checker = membership_checker
        self._invalidation_publisher = invalidation_publisher
        self._probe = probe or DefaultLocationServiceProbe()

    async def list(self, context: TenantContext) -> list[Location]:
        locations = await self._location_repository.list_for_tenant(
            context.tenant_id
        )
        self._probe.locations_listed(context.tenant_id, len(locations))
        return locations

    async def create(self, context: TenantContext, name: str) -> Location:
        location = Location.create(tenant_id=context.tenant_id, name=name)

        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            await self._location_repository.save(location)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.LOCATION
            )

        self._probe.location_created(
            context.tenant_id, location.id.value, location.name
        )
        return location

    async def rename(
        self, context: TenantContext, location_id: str, name: str
    ) -> Location:
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            location = await self._load(context, location_id)
            location.rename(name)
            await self._location_repository.save(location)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.LOCATION
            )

        self._probe.location_renamed(
            context.tenant_id, location.id.value, location.name
        )
        return location

    async def delete(self, context: TenantContext, location_id: str) -> None:
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            location = await self._load(context, location_id)
            await self._location_repository.delete(location)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.LOCATION
            )

        self._probe.location_deleted(context.tenant_id, location.id.value)

    async def _load(self, context: TenantContext, location_id: str) -> Location:
        try:
            lid = LocationId.from_string(location_id)
        except ValueError as e:
            self._probe.location_not_found(context.tenant_id, location_id)
            raise LocationNotFoundError(location_id) from e

        location = await self._location_repository.get_by_id(
            lid, context.tenant_id
        )
        if location is None:
            self._probe.location_not_found(context.tenant_id, lid.value)
            raise LocationNotFoundError(location_id)
        return location

    async def _ensure_actor_is_member(self, context: TenantContext) -> None:
        if not await self._membership_checker.is_member(
            context.principal.id, context.tenant_id
        ):
            self._probe.actor_membership_revoked(
                context.tenant_id, context.principal.id
            )
            raise MembershipRevokedError()
