"""Unit tests for LocationService."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from organization.application.services import LocationService
from organization.domain.aggregates import Location
from organization.domain.value_objects import LocationId
from organization.ports.exceptions import LocationNotFoundError
from organization.ports.repositories import ILocationRepository
from shared_kernel.invalidation import InvalidationScope
from shared_kernel.membership import MembershipRevokedError

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
LOCATION_ID = "01JDDDDDDDDDDDDDDDDDDDDDDD"


@pytest.fixture
def location_repository():
    return create_autospec(ILocationRepository, instance=True)


@pytest.fixture
def membership_checker():
    checker = MagicMock()
    checker.is_member = AsyncMock(return_value=True)
    return checker


@pytest.fixture
def service(mock_session, location_repository, membership_checker, mock_publisher):
    return LocationService(
        session=mock_session,
        location_repository=location_repository,
        membership_checker=membership_checker,
        invalidation_publisher=mock_publisher,
        probe=MagicMock(),
    )


class TestLocationService:
    @pytest.mark.asyncio
    async def test_create_publishes_location_scope(
        self, service, location_repository, mock_publisher, tenant_context
    ):
        location = await service.create(tenant_context, "Main street")

        assert location.tenant_id == TENANT_A
        location_repository.save.assert_awaited_once_with(location)
        mock_publisher.publish.assert_awaited_once_with(
            TENANT_A, InvalidationScope.LOCATION
        )

    @pytest.mark.asyncio
    async def test_rename(self, service, location_repository, tenant_context):
        location_repository.get_by_id.return_value = Location(
            id=LocationId(LOCATION_ID), tenant_id=TENANT_A, name="Main street"
        )

        location = await service.rename(tenant_context, LOCATION_ID, "Harbour")

        assert location.name == "Harbour"
        location_repository.save.assert_awaited_once_with(location)

    @pytest.mark.asyncio
    async def test_delete_missing_location(
        self, service, location_repository, mock_publisher, tenant_context
    ):
        location_repository.get_by_id.return_value = None

        with pytest.raises(LocationNotFoundError):
            await service.delete(tenant_context, LOCATION_ID)

        location_repository.delete.assert_not_called()
        mock_publisher.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_publishes_location_scope(
        self, service, location_repository, mock_publisher, tenant_context
    ):
        location = Location(
            id=LocationId(LOCATION_ID), tenant_id=TENANT_A, name="Main street"
        )
        location_repository.get_by_id.return_value = location

        await service.delete(tenant_context, LOCATION_ID)

        location_repository.delete.assert_awaited_once_with(location)
        mock_publisher.publish.assert_awaited_once_with(
            TENANT_A, InvalidationScope.LOCATION
        )

    @pytest.mark.asyncio
    async def test_revoked_actor_cannot_mutate(
        self, service, location_repository, membership_checker, tenant_context
    ):
        membership_checker.is_member.return_value = False

        with pytest.raises(MembershipRevokedError):
            await service.create(tenant_context, "Main street")

        location_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_reads_active_tenant(
        self, service, location_repository, tenant_context
    ):
        location_repository.list_for_tenant.return_value = []

        assert await service.list(tenant_context) == []
        location_repository.list_for_tenant.assert_awaited_once_with(TENANT_A)
