"""Unit tests for SqlMemberReferenceChecker."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from organization.infrastructure.member_reference_checker import (
    SqlMemberReferenceChecker,
)
from organization.ports.repositories import IMemberReferenceChecker

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
MEMBERSHIP_ID = "01JMMMMMMMMMMMMMMMMMMMMMMM"


@pytest.fixture
def mock_session():
    return AsyncMock()


class TestSqlMemberReferenceChecker:
    def test_implements_protocol(self, mock_session):
        assert isinstance(
            SqlMemberReferenceChecker(mock_session), IMemberReferenceChecker
        )

    @pytest.mark.asyncio
    async def test_membership_in_tenant(self, mock_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = 1
        mock_session.execute.return_value = result

        checker = SqlMemberReferenceChecker(mock_session)

        assert await checker.exists(MEMBERSHIP_ID, TENANT_A) is True
        params = mock_session.execute.call_args.args[1]
        assert params == {"membership_id": MEMBERSHIP_ID, "tenant_id": TENANT_A}

    @pytest.mark.asyncio
    async def test_query_is_scoped_to_tenant(self, mock_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        checker = SqlMemberReferenceChecker(mock_session)

        assert await checker.exists(MEMBERSHIP_ID, TENANT_A) is False
        sql = str(mock_session.execute.call_args.args[0])
        assert "tenant_id = :tenant_id" in sql
