"""Unit tests for Membership aggregate."""

import pytest

from iam.domain.aggregates import Membership
from iam.domain.exceptions import InvalidDisplayNameError
from iam.domain.value_objects import PrincipalId, TenantId


@pytest.fixture
def membership() -> Membership:
    return Membership.create(
        tenant_id=TenantId.generate(),
        principal_id=PrincipalId("user-123"),
        display_name=" Alice ",
    )


class TestMembershipCreate:
    def test_trims_display_name(self, membership):
        assert membership.display_name == "Alice"

    def test_blank_display_name_becomes_none(self):
        membership = Membership.create(
            tenant_id=TenantId.generate(),
            principal_id=PrincipalId("user-123"),
            display_name="   ",
        )

        assert membership.display_name is None

    def test_sets_created_at(self, membership):
        assert membership.created_at.tzinfo is not None

    def test_rejects_long_display_name(self):
        with pytest.raises(InvalidDisplayNameError):
            Membership.create(
                tenant_id=TenantId.generate(),
                principal_id=PrincipalId("user-123"),
                display_name="x" * 101,
            )


class TestMembershipUpdate:
    def test_replaces_name_and_role(self, membership):
        membership.update(display_name="Al", role_id="01JRRRRRRRRRRRRRRRRRRRRRRR")

        assert membership.display_name == "Al"
        assert membership.role_id == "01JRRRRRRRRRRRRRRRRRRRRRRR"

    def test_clearing_role(self, membership):
        membership.update(display_name="Al", role_id=None)

        assert membership.role_id is None

    def test_belongs_to(self, membership):
        assert membership.belongs_to(membership.tenant_id)
        assert not membership.belongs_to(TenantId.generate())
