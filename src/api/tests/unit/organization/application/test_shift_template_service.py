"""Unit tests for ShiftTemplateService."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from organization.application.services import ShiftTemplateService
from organization.domain.aggregates import Location, Role, ShiftTemplate
from organization.domain.exceptions import InvalidShiftTemplateError
from organization.domain.value_objects import LocationId, RoleId, ShiftTemplateId
from organization.ports.exceptions import (
    InvalidShiftReferenceError,
    ShiftTemplateNotFoundError,
)
from organization.ports.repositories import (
    ILocationRepository,
    IRoleRepository,
    IShiftTemplateRepository,
)
from shared_kernel.invalidation import InvalidationScope
from shared_kernel.membership import MembershipRevokedError

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
ROLE_ID = "01JRRRRRRRRRRRRRRRRRRRRRRR"
LOCATION_ID = "01JDDDDDDDDDDDDDDDDDDDDDDD"
TEMPLATE_ID = "01JTTTTTTTTTTTTTTTTTTTTTTT"


@pytest.fixture
def template_repository():
    return create_autospec(IShiftTemplateRepository, instance=True)


@pytest.fixture
def role_repository():
    repository = create_autospec(IRoleRepository, instance=True)
    repository.get_by_id.return_value = Role(
        id=RoleId(ROLE_ID), tenant_id=TENANT_A, name="Barista"
    )
    return repository


@pytest.fixture
def location_repository():
    repository = create_autospec(ILocationRepository, instance=True)
    repository.get_by_id.return_value = Location(
        id=LocationId(LOCATION_ID), tenant_id=TENANT_A, name="Main street"
    )
    return repository


@pytest.fixture
def membership_checker():
    checker = MagicMock()
    checker.is_member = AsyncMock(return_value=True)
    return checker


@pytest.fixture
def service(
    mock_session,
    template_repository,
    role_repository,
    location_repository,
    membership_checker,
    mock_publisher,
):
    return ShiftTemplateService(
        session=mock_session,
        template_repository=template_repository,
        role_repository=role_repository,
        location_repository=location_repository,
        membership_checker=membership_checker,
        invalidation_publisher=mock_publisher,
        probe=MagicMock(),
    )


class TestShiftTemplateService:
    @pytest.mark.asyncio
    async def test_create_with_role_and_location(
        self, service, template_repository, mock_publisher, tenant_context
    ):
        template = await service.create(
            tenant_context,
            name="Morning",
            start_time="06:00",
            end_time="14:00",
            role_id=ROLE_ID.lower(),
            location_id=LOCATION_ID,
        )

        assert template.role_id == ROLE_ID
        assert template.location_id == LOCATION_ID
        template_repository.save.assert_awaited_once_with(template)
        mock_publisher.publish.assert_awaited_once_with(
            TENANT_A, InvalidationScope.SHIFT
        )

    @pytest.mark.asyncio
    async def test_role_of_another_tenant_is_rejected(
        self, service, role_repository, template_repository, tenant_context
    ):
        role_repository.get_by_id.return_value = None

        with pytest.raises(InvalidShiftReferenceError) as exc_info:
            await service.create(
                tenant_context,
                name="Morning",
                start_time="06:00",
                end_time="14:00",
                role_id=ROLE_ID,
            )

        assert exc_info.value.field == "role"
        role_repository.get_by_id.assert_awaited_once_with(RoleId(ROLE_ID), TENANT_A)
        template_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_time_fails_before_transaction(
        self, service, mock_session, tenant_context
    ):
        with pytest.raises(InvalidShiftTemplateError):
            await service.create(
                tenant_context, name="Morning", start_time="6am", end_time="14:00"
            )

        mock_session.begin.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_clears_references(
        self, service, template_repository, tenant_context
    ):
        template_repository.get_by_id.return_value = ShiftTemplate(
            id=ShiftTemplateId(TEMPLATE_ID),
            tenant_id=TENANT_A,
            name="Morning",
            start_time="06:00",
            end_time="14:00",
            role_id=ROLE_ID,
        )

        template = await service.update(
            tenant_context,
            TEMPLATE_ID,
            name="Early",
            start_time="05:00",
            end_time="13:00",
        )

        assert template.name == "Early"
        assert template.role_id is None
        template_repository.save.assert_awaited_once_with(template)

    @pytest.mark.asyncio
    async def test_delete_missing_template(
        self, service, template_repository, mock_publisher, tenant_context
    ):
        template_repository.get_by_id.return_value = None

        with pytest.raises(ShiftTemplateNotFoundError):
            await service.delete(tenant_context, TEMPLATE_ID)

        mock_publisher.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoked_actor_cannot_mutate(
        self, service, template_repository, membership_checker, tenant_context
    ):
        membership_checker.is_member.return_value = False

        with pytest.raises(MembershipRevokedError):
            await service.create(
                tenant_context, name="Morning", start_time="06:00", end_time="14:00"
            )

        template_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_reads_active_tenant(
        self, service, template_repository, tenant_context
    ):
        template_repository.list_for_tenant.return_value = []

        assert await service.list(tenant_context) == []
        template_repository.list_for_tenant.assert_awaited_once_with(TENANT_A)
