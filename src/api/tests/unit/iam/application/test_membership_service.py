"""Unit tests for MembershipService."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from iam.application.observability import MembershipServiceProbe
from iam.application.services import MembershipService
from iam.domain.aggregates import Membership
from iam.domain.value_objects import (
    MemberListing,
    MembershipId,
    PrincipalId,
    TenantId,
)
from iam.ports.exceptions import (
    MembershipNotFoundError,
    RoleNotInTenantError,
    UnauthorizedError,
)
from iam.ports.repositories import IMembershipRepository, IRoleReferenceChecker
from shared_kernel.invalidation import InvalidationScope

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
ROLE_ID = "01JRRRRRRRRRRRRRRRRRRRRRRR"


@pytest.fixture
def other_membership() -> Membership:
    return Membership(
        id=MembershipId.generate(),
        tenant_id=TenantId(TENANT_A),
        principal_id=PrincipalId("user-456"),
        display_name="Bob",
    )


@pytest.fixture
def mock_membership_repo(other_membership):
    repo = Mock(spec=IMembershipRepository)
    repo.exists = AsyncMock(return_value=True)
    repo.get_by_id = AsyncMock(return_value=other_membership)
    repo.save = AsyncMock()
    repo.delete = AsyncMock(return_value=True)
    repo.list_members = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_role_checker():
    checker = Mock(spec=IRoleReferenceChecker)
    checker.exists = AsyncMock(return_value=True)
    return checker


@pytest.fixture
def mock_probe():
    return MagicMock(spec=MembershipServiceProbe)


@pytest.fixture
def service(
    mock_session, mock_membership_repo, mock_role_checker, mock_publisher, mock_probe
):
    return MembershipService(
        session=mock_session,
        membership_repository=mock_membership_repo,
        role_reference_checker=mock_role_checker,
        invalidation_publisher=mock_publisher,
        probe=mock_probe,
    )


class TestListMembers:
    @pytest.mark.asyncio
    async def test_lists_members_of_active_tenant(
        self, service, tenant_context, mock_membership_repo
    ):
        listing = MemberListing(
            membership_id="m1",
            principal_id="user-123",
            display_name="Alice",
            email="alice@example.com",
            role_id=None,
            created_at=datetime.now(UTC),
        )
        mock_membership_repo.list_members.return_value = [listing]

        result = await service.list_members(tenant_context)

        assert result == [listing]
        mock_membership_repo.list_members.assert_awaited_once_with(TenantId(TENANT_A))


class TestUpdateMember:
    @pytest.mark.asyncio
    async def test_updates_display_name_and_role(
        self, service, tenant_context, other_membership, mock_publisher
    ):
        result = await service.update_member(
            tenant_context,
            membership_id=other_membership.id.value,
            display_name="Robert",
            role_id=ROLE_ID,
        )

        assert result.display_name == "Robert"
        assert result.role_id == ROLE_ID
        mock_publisher.publish.assert_awaited_once_with(
            TENANT_A, InvalidationScope.MEMBERSHIP
        )

    @pytest.mark.asyncio
    async def test_lookup_is_scoped_to_active_tenant(
        self, service, tenant_context, other_membership, mock_membership_repo
    ):
        await service.update_member(
            tenant_context, other_membership.id.value, "Bob", None
        )

        mock_membership_repo.get_by_id.assert_awaited_once_with(
            other_membership.id, TenantId(TENANT_A)
        )

    @pytest.mark.asyncio
    async def test_role_from_other_tenant_is_rejected(
        self,
        service,
        tenant_context,
        other_membership,
        mock_role_checker,
        mock_membership_repo,
    ):
        mock_role_checker.exists.return_value = False

        with pytest.raises(RoleNotInTenantError):
            await service.update_member(
                tenant_context, other_membership.id.value, "Bob", ROLE_ID
            )

        mock_role_checker.exists.assert_awaited_once_with(ROLE_ID, TENANT_A)
        mock_membership_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_membership_in_other_tenant_is_not_found(
        self, service, tenant_context, mock_membership_repo
    ):
        mock_membership_repo.get_by_id.return_value = None

        with pytest.raises(MembershipNotFoundError):
            await service.update_member(
                tenant_context, MembershipId.generate().value, "Bob", None
            )

    @pytest.mark.asyncio
    async def test_malformed_membership_id_is_not_found(
        self, service, tenant_context, mock_session
    ):
        with pytest.raises(MembershipNotFoundError):
            await service.update_member(tenant_context, "garbage", "Bob", None)

        mock_session.begin.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoked_actor_fails_closed(
        self,
        service,
        tenant_context,
        other_membership,
        mock_membership_repo,
        mock_publisher,
        mock_probe,
    ):
        mock_membership_repo.exists.return_value = False

        with pytest.raises(UnauthorizedError):
            await service.update_member(
                tenant_context, other_membership.id.value, "Bob", None
            )

        mock_membership_repo.save.assert_not_called()
        mock_publisher.publish.assert_not_called()
        mock_probe.actor_membership_revoked.assert_called_once_with(
            TENANT_A, "user-123"
        )


class TestRemoveMember:
    @pytest.mark.asyncio
    async def test_removes_other_member(
        self, service, tenant_context, other_membership, mock_membership_repo
    ):
        removal = await service.remove_member(
            tenant_context, other_membership.id.value
        )

        assert removal.removed_self is False
        mock_membership_repo.delete.assert_awaited_once_with(other_membership)

    @pytest.mark.asyncio
    async def test_reports_self_removal(
        self, service, tenant_context, mock_membership_repo, mock_publisher
    ):
        own = Membership(
            id=MembershipId.generate(),
            tenant_id=TenantId(TENANT_A),
            principal_id=PrincipalId("user-123"),
        )
        mock_membership_repo.get_by_id.return_value = own

        removal = await service.remove_member(tenant_context, own.id.value)

        assert removal.removed_self is True
        assert removal.membership_id == own.id.value
        mock_publisher.publish.assert_awaited_once_with(
            TENANT_A, InvalidationScope.MEMBERSHIP
        )

    @pytest.mark.asyncio
    async def test_revoked_actor_cannot_remove(
        self, service, tenant_context, other_membership, mock_membership_repo
    ):
        mock_membership_repo.exists.return_value = False

        with pytest.raises(UnauthorizedError):
            await service.remove_member(tenant_context, other_membership.id.value)

        mock_membership_repo.delete.assert_not_called()
