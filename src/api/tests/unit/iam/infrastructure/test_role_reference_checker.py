"""Unit tests for SqlRoleReferenceChecker."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.infrastructure.role_reference_checker import SqlRoleReferenceChecker
from iam.ports.repositories import IRoleReferenceChecker

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
ROLE_ID = "01JRRRRRRRRRRRRRRRRRRRRRRR"


@pytest.fixture
def mock_session():
    return AsyncMock()


class TestSqlRoleReferenceChecker:
    def test_implements_protocol(self, mock_session):
        assert isinstance(SqlRoleReferenceChecker(mock_session), IRoleReferenceChecker)

    @pytest.mark.asyncio
    async def test_role_in_tenant(self, mock_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = 1
        mock_session.execute.return_value = result

        checker = SqlRoleReferenceChecker(mock_session)

        assert await checker.exists(ROLE_ID, TENANT_A) is True
        params = mock_session.execute.call_args.args[1]
        assert params == {"role_id": ROLE_ID, "tenant_id": TENANT_A}

    @pytest.mark.asyncio
    async def test_query_is_scoped_to_tenant(self, mock_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = result

        assert await SqlRoleReferenceChecker(mock_session).exists(ROLE_ID, TENANT_A) is False
        sql = str(mock_session.execute.call_args.args[0])
        assert "tenant_id = :tenant_id" in sql
