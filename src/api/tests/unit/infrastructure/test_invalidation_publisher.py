"""Unit tests for PostgresNotifyInvalidationPublisher."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher
from shared_kernel.invalidation import InvalidationScope, TenantInvalidationPublisher

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"


@pytest.fixture
def session():
    return AsyncMock()


class TestPostgresNotifyInvalidationPublisher:
    def test_implements_port(self, session):
        assert isinstance(
            PostgresNotifyInvalidationPublisher(session), TenantInvalidationPublisher
        )

    @pytest.mark.asyncio
    async def test_notifies_through_callers_session(self, session):
        probe = MagicMock()
        publisher = PostgresNotifyInvalidationPublisher(
            session, channel="invalidations", probe=probe
        )

        await publisher.publish(TENANT_A, InvalidationScope.MEMBERSHIP)

        stmt, params = session.execute.call_args.args
        assert "pg_notify" in str(stmt)
        assert params["channel"] == "invalidations"
        assert json.loads(params["payload"]) == {
            "tenant_id": TENANT_A,
            "scope": "membership",
        }
        probe.signal_published.assert_called_once_with(TENANT_A, "membership")

    @pytest.mark.asyncio
    async def test_does_not_commit(self, session):
        await PostgresNotifyInvalidationPublisher(session).publish(
            TENANT_A, InvalidationScope.ROLE
        )

        session.commit.assert_not_called()
