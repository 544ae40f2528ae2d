"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from shared_kernel.middleware.tenant_context import (
    Principal,
    TenantContext,
    TenantSummary,
)

# Fixed ULIDs so ordering and membership assertions are readable
TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
TENANT_B = "01JBBBBBBBBBBBBBBBBBBBBBBB"
TENANT_C = "01JCCCCCCCCCCCCCCCCCCCCCCC"


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def principal() -> Principal:
    """An authenticated principal."""
    return Principal(id="user-123", email="alice@example.com", display_name="Alice")


@pytest.fixture
def tenant_a() -> TenantSummary:
    return TenantSummary(id=TENANT_A, name="Acme Coffee")


@pytest.fixture
def tenant_b() -> TenantSummary:
    return TenantSummary(id=TENANT_B, name="Bistro Nord")


@pytest.fixture
def tenant_context(principal, tenant_a, tenant_b) -> TenantContext:
    """A resolved context with tenant A active."""
    return TenantContext(
        principal=principal,
        active_tenant=tenant_a,
        all_tenants=(tenant_a, tenant_b),
        source="preference",
    )


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() works as an async context manager."""
    session = Mock(spec=AsyncSession)

    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.add = Mock()
    return session


@pytest.fixture
def mock_publisher():
    """Mock invalidation publisher."""
    publisher = Mock()
    publisher.publish = AsyncMock()
    return publisher
