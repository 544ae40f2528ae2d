"""Unit tests for main FastAPI application configuration."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest
from asgi_lifespan import LifespanManager
from fastapi.testclient import TestClient

from iam.dependencies.tenant_context import get_tenant_context
from iam.ports.exceptions import TenantAccessVerificationError
from infrastructure.version import __version__
from main import app, run_invalidation_listener
from organization.dependencies.role import get_role_service


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Client without lifespan so no database listener is started."""
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestApplicationMetadata:
    def test_title_and_version(self):
        assert app.title == "Shiftboard API"
        assert app.version == __version__

    def test_bounded_context_routes_are_mounted(self):
        paths = {route.path for route in app.routes}

        assert "/iam/context" in paths
        assert "/iam/tenants" in paths
        assert "/iam/members" in paths
        assert "/organization/roles" in paths
        assert "/organization/locations" in paths
        assert "/organization/shifts" in paths
        assert "/organization/shift-templates" in paths
        assert "/iam/context/invalidations" in paths

    def test_teardown_routes_are_mounted(self):
        paths = {route.path for route in app.routes}

        assert "/iam/tenants/{tenant_id}" in paths
        assert "/organization/roles/{role_id}" in paths


class TestHealth:
    def test_health_returns_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestAccessVerificationHandler:
    def test_collaborator_failure_maps_to_service_unavailable(self, client):
        """A failed membership lookup is reported as 503, never 401 or 403."""

        def failing_context():
            raise TenantAccessVerificationError("membership", "TimeoutError")

        app.dependency_overrides[get_tenant_context] = failing_context

        response = client.get("/iam/context")

        assert response.status_code == 503
        assert response.json() == {
            "detail": "Access verification failed. Please try again."
        }

    def test_error_detail_does_not_leak_collaborator_type(self, client):
        def failing_context():
            raise TenantAccessVerificationError("identity", "ConnectError")

        app.dependency_overrides[get_tenant_context] = failing_context
        app.dependency_overrides[get_role_service] = lambda: Mock()

        response = client.get("/organization/roles")

        assert response.status_code == 503
        assert "ConnectError" not in response.text


class TestLifespan:
    @pytest.mark.asyncio
    async def test_lifespan_configures_logging_and_disposes_engines(self):
        events: list[str] = []

        @asynccontextmanager
        async def fake_listener(_app):
            events.append("listener_started")
            yield
            events.append("listener_stopped")

        close = AsyncMock(side_effect=lambda: events.append("engines_closed"))

        with (
            patch("main.configure_logging") as configure,
            patch("main.get_settings", return_value=Mock(log_level="DEBUG")),
            patch("main.run_invalidation_listener", fake_listener),
            patch("main.close_database_connections", close),
        ):
            async with LifespanManager(app):
                events.append("serving")

        configure.assert_called_once_with("DEBUG")
        assert events == [
            "listener_started",
            "serving",
            "listener_stopped",
            "engines_closed",
        ]

    @pytest.mark.asyncio
    async def test_invalidation_listener_is_started_and_stopped(self):
        listener = MagicMock()
        listener.start = AsyncMock()
        listener.stop = AsyncMock()

        with (
            patch(
                "main.PostgresNotifyInvalidationListener", return_value=listener
            ) as listener_cls,
            patch("main.build_listen_dsn", return_value="postgresql://db/test"),
            patch("main.get_database_settings"),
            patch("main.get_invalidation_broadcaster") as get_broadcaster,
            patch(
                "main.get_tenancy_settings",
                return_value=Mock(invalidation_channel="tenant_invalidations"),
            ),
        ):
            async with run_invalidation_listener(app):
                pass

        listener_cls.assert_called_once_with(
            db_url="postgresql://db/test",
            broadcaster=get_broadcaster.return_value,
            channel="tenant_invalidations",
        )
        listener.start.assert_awaited_once()
        listener.stop.assert_awaited_once()
