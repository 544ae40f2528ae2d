"""Unit tests for the tenant context routes."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import TenantSwitchService
from iam.application.value_objects import TenantSwitched, TenantSwitchUnchanged
from iam.infrastructure.preference_codec import ActiveTenantPreferenceCodec
from shared_kernel.middleware.tenant_context import AuthorizationDenied

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
TENANT_B = "01JBBBBBBBBBBBBBBBBBBBBBBB"
COOKIE = "app-active-company-id"


@pytest.fixture
def codec() -> ActiveTenantPreferenceCodec:
    return ActiveTenantPreferenceCodec("test-preference-secret")


@pytest.fixture
def mock_switch_service() -> AsyncMock:
    return AsyncMock(spec=TenantSwitchService)


@pytest.fixture
def raw_preference() -> dict[str, str | None]:
    """Mutable holder for the preference cookie the request carries."""
    return {"value": None}


@pytest.fixture
def test_client(
    mock_switch_service, codec, principal, tenant_context, raw_preference
) -> TestClient:
    from iam.dependencies.authentication import get_current_principal
    from iam.dependencies.tenant import get_tenant_switch_service
    from iam.dependencies.tenant_context import (
        get_preference_codec,
        get_preference_cookie,
        get_tenant_context,
    )
    from iam.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_current_principal] = lambda: principal
    app.dependency_overrides[get_tenant_context] = lambda: tenant_context
    app.dependency_overrides[get_tenant_switch_service] = lambda: mock_switch_service
    app.dependency_overrides[get_preference_codec] = lambda: codec
    app.dependency_overrides[get_preference_cookie] = lambda: raw_preference["value"]
    app.include_router(router)

    return TestClient(app)


class TestGetContext:
    def test_returns_active_tenant_and_switcher_entries(self, test_client):
        response = test_client.get("/iam/context")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["active_tenant"] == {"id": TENANT_A, "name": "Acme Coffee"}
        assert [t["id"] for t in body["tenants"]] == [TENANT_A, TENANT_B]
        assert body["principal"]["id"] == "user-123"
        assert body["source"] == "preference"


class TestSwitchActiveTenant:
    def test_switch_writes_signed_preference(
        self, test_client, mock_switch_service, codec
    ):
        mock_switch_service.switch.return_value = TenantSwitched(tenant_id=TENANT_B)

        response = test_client.post(
            "/iam/context/active-tenant", json={"tenant_id": TENANT_B}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "switched", "tenant_id": TENANT_B}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{COOKIE}=")
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()
        value = set_cookie.split(";")[0].split("=", 1)[1]
        assert codec.decode(value, "user-123") == TENANT_B

    def test_unchanged_switch_writes_nothing(self, test_client, mock_switch_service):
        mock_switch_service.switch.return_value = TenantSwitchUnchanged(
            tenant_id=TENANT_A
        )

        response = test_client.post(
            "/iam/context/active-tenant", json={"tenant_id": TENANT_A}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "unchanged"
        assert "set-cookie" not in response.headers

    def test_current_preference_is_passed_to_service(
        self, test_client, mock_switch_service, codec, principal, raw_preference
    ):
        raw_preference["value"] = codec.encode("user-123", TENANT_A)
        mock_switch_service.switch.return_value = TenantSwitched(tenant_id=TENANT_B)

        test_client.post("/iam/context/active-tenant", json={"tenant_id": TENANT_B})

        mock_switch_service.switch.assert_awaited_once_with(
            principal, TENANT_B, TENANT_A
        )

    def test_tampered_preference_is_treated_as_absent(
        self, test_client, mock_switch_service, principal, raw_preference
    ):
        raw_preference["value"] = "tampered"
        mock_switch_service.switch.return_value = TenantSwitched(tenant_id=TENANT_B)

        test_client.post("/iam/context/active-tenant", json={"tenant_id": TENANT_B})

        mock_switch_service.switch.assert_awaited_once_with(principal, TENANT_B, None)

    def test_denied_switch_is_403_and_keeps_preference(
        self, test_client, mock_switch_service
    ):
        mock_switch_service.switch.return_value = AuthorizationDenied(
            reason="Not authorized for this company or it does not exist"
        )

        response = test_client.post(
            "/iam/context/active-tenant", json={"tenant_id": TENANT_B}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "set-cookie" not in response.headers

    def test_denied_switch_clears_preference_pointing_at_rejected_tenant(
        self, test_client, mock_switch_service
    ):
        mock_switch_service.switch.return_value = AuthorizationDenied(
            reason="Not authorized for this company or it does not exist",
            clear_preference=True,
        )

        response = test_client.post(
            "/iam/context/active-tenant", json={"tenant_id": TENANT_B}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{COOKIE}=")
        assert "Max-Age=0" in set_cookie

    def test_empty_tenant_id_is_422(self, test_client, mock_switch_service):
        response = test_client.post("/iam/context/active-tenant", json={"tenant_id": ""})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_switch_service.switch.assert_not_called()


class TestClearActiveTenant:
    def test_clears_cookie(self, test_client):
        response = test_client.delete("/iam/context/active-tenant")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert "Max-Age=0" in response.headers["set-cookie"]

    def test_requires_authentication(self, test_client):
        from iam.dependencies.authentication import (
            get_access_token,
            get_current_principal,
            get_identity_provider,
        )

        provider = MagicMock()
        provider.get_principal = AsyncMock(return_value=None)
        app = test_client.app
        del app.dependency_overrides[get_current_principal]
        app.dependency_overrides[get_access_token] = lambda: None
        app.dependency_overrides[get_identity_provider] = lambda: provider

        response = test_client.delete("/iam/context/active-tenant")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["x-redirect-to"] == "/auth/signin"


class RecordingSession:
    """Stands in for an AsyncSession and logs when it opens and closes."""

    def __init__(self, log: list[str]) -> None:
        self.log = log

    async def __aenter__(self) -> RecordingSession:
        self.log.append("session_open")
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.log.append("session_closed")


class RecordingMembershipRepository:
    def __init__(self, session: RecordingSession, members: list[bool]) -> None:
        self._session = session
        self._members = members

    async def list_tenants_for_principal(self, principal_id):
        self._session.log.append("tenants_listed")
        return [SimpleNamespace(tenant_id=TENANT_A, tenant_name="Acme Coffee")]

    async def is_member(self, principal_id: str, tenant_id: str) -> bool:
        self._session.log.append("membership_checked")
        return self._members.pop(0)


class TestStreamInvalidations:
    """The SSE stream only carries signals of the request's active tenant."""

    @pytest.fixture
    def still_member(self) -> AsyncMock:
        return AsyncMock(return_value=True)

    @pytest.mark.asyncio
    async def test_streams_active_tenant_signals_until_disconnect(
        self, tenant_context, still_member
    ):
        from iam.presentation.context.routes import stream_invalidations
        from shared_kernel.invalidation import (
            InvalidationBroadcaster,
            InvalidationScope,
            InvalidationSignal,
        )

        broadcaster = InvalidationBroadcaster(probe=MagicMock())
        request = MagicMock()
        request.is_disconnected = AsyncMock(side_effect=[False, True])

        response = await stream_invalidations(
            request, tenant_context, still_member, broadcaster
        )
        events = response.body_iterator

        assert response.media_type == "text/event-stream"
        assert await anext(events) == ": connected\n\n"
        assert broadcaster.subscriber_count(TENANT_A) == 1

        broadcaster.dispatch(InvalidationSignal(TENANT_B, InvalidationScope.ROLE))
        broadcaster.dispatch(InvalidationSignal(TENANT_A, InvalidationScope.LOCATION))

        event = await anext(events)
        assert event.startswith("event: invalidate\n")
        assert f'"tenant_id": "{TENANT_A}"' in event
        assert '"scope": "location"' in event

        with pytest.raises(StopAsyncIteration):
            await anext(events)
        assert broadcaster.subscriber_count(TENANT_A) == 0
        still_member.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_keepalive_rechecks_membership_and_continues(
        self, tenant_context, monkeypatch
    ):
        from iam.presentation.context import routes
        from shared_kernel.invalidation import InvalidationBroadcaster

        monkeypatch.setattr(routes, "KEEPALIVE_SECONDS", 0.01)
        still_member = AsyncMock(side_effect=[True, True])
        request = MagicMock()
        request.is_disconnected = AsyncMock(side_effect=[False, False, True])

        response = await routes.stream_invalidations(
            request, tenant_context, still_member, InvalidationBroadcaster(probe=MagicMock())
        )
        chunks = [chunk async for chunk in response.body_iterator]

        assert chunks == [": connected\n\n", ": keepalive\n\n", ": keepalive\n\n"]
        assert still_member.await_count == 2

    @pytest.mark.asyncio
    async def test_member_removed_mid_stream_ends_stream_with_revoked_event(
        self, tenant_context, monkeypatch
    ):
        from iam.presentation.context import routes
        from shared_kernel.invalidation import InvalidationBroadcaster

        monkeypatch.setattr(routes, "KEEPALIVE_SECONDS", 0.01)
        broadcaster = InvalidationBroadcaster(probe=MagicMock())
        still_member = AsyncMock(side_effect=[True, False])
        request = MagicMock()
        request.is_disconnected = AsyncMock(return_value=False)

        response = await routes.stream_invalidations(
            request, tenant_context, still_member, broadcaster
        )
        chunks = [chunk async for chunk in response.body_iterator]

        assert chunks[:2] == [": connected\n\n", ": keepalive\n\n"]
        assert chunks[2] == (
            f'event: revoked\ndata: {{"tenant_id": "{TENANT_A}"}}\n\n'
        )
        assert len(chunks) == 3
        assert broadcaster.subscriber_count(TENANT_A) == 0


class TestStreamInvalidationsSessionLifetime:
    """Streams resolve their context on sessions closed before streaming."""

    @pytest.fixture
    def log(self) -> list[str]:
        return []

    @pytest.fixture
    def stream_client(self, log, principal, codec, monkeypatch) -> TestClient:
        from iam.dependencies import tenant_context as tenant_context_deps
        from iam.dependencies.authentication import get_identity_provider
        from iam.dependencies.tenant_context import get_preference_codec
        from iam.presentation import router
        from iam.presentation.context import routes
        from infrastructure.database.dependencies import get_read_sessionmaker
        from infrastructure.invalidation.dependencies import (
            get_invalidation_broadcaster,
        )
        from shared_kernel.invalidation import InvalidationBroadcaster

        class RecordingBroadcaster(InvalidationBroadcaster):
            def subscribe(self, tenant_id):
                log.append("stream_subscribed")
                return super().subscribe(tenant_id)

        members = [True, False]
        monkeypatch.setattr(routes, "KEEPALIVE_SECONDS", 0.01)
        monkeypatch.setattr(
            tenant_context_deps,
            "MembershipRepository",
            lambda session: RecordingMembershipRepository(session, members),
        )

        provider = MagicMock()
        provider.get_principal = AsyncMock(return_value=principal)
        broadcaster = RecordingBroadcaster(probe=MagicMock())

        app = FastAPI()
        app.dependency_overrides[get_identity_provider] = lambda: provider
        app.dependency_overrides[get_preference_codec] = lambda: codec
        app.dependency_overrides[get_read_sessionmaker] = lambda: (
            lambda: RecordingSession(log)
        )
        app.dependency_overrides[get_invalidation_broadcaster] = lambda: broadcaster
        app.include_router(router)
        return TestClient(app)

    def test_context_session_closes_before_stream_subscribes(
        self, stream_client, log
    ):
        response = stream_client.get(
            "/iam/context/invalidations",
            headers={"Authorization": "Bearer token"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.text.startswith(": connected\n\n: keepalive\n\n")
        assert "event: revoked" in response.text
        assert log == [
            "session_open",
            "tenants_listed",
            "session_closed",
            "stream_subscribed",
            "session_open",
            "membership_checked",
            "session_closed",
            "session_open",
            "membership_checked",
            "session_closed",
        ]

    def test_every_session_is_closed_once_stream_ends(self, stream_client, log):
        stream_client.get(
            "/iam/context/invalidations",
            headers={"Authorization": "Bearer token"},
        )

        assert log.count("session_open") == log.count("session_closed") == 3

    def test_tenant_header_does_not_select_streamed_tenant(self, stream_client):
        response = stream_client.get(
            "/iam/context/invalidations",
            headers={"Authorization": "Bearer token", "X-Tenant-ID": TENANT_B},
        )

        assert f'"tenant_id": "{TENANT_A}"' in response.text
        assert TENANT_B not in response.text
