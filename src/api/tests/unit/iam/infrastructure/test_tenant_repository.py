"""Unit tests for TenantRepository."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.domain.aggregates import Tenant
from iam.domain.value_objects import TenantId
from iam.infrastructure.models import TenantModel
from iam.infrastructure.tenant_repository import TenantRepository
from iam.ports.repositories import ITenantRepository


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_probe():
    return MagicMock()


@pytest.fixture
def repository(mock_session, mock_probe):
    return TenantRepository(session=mock_session, probe=mock_probe)


def result_with(model):
    result = MagicMock()
    result.scalar_one_or_none.return_value = model
    return result


class TestTenantRepository:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, ITenantRepository)

    @pytest.mark.asyncio
    async def test_save_inserts_and_flushes(self, repository, mock_session, mock_probe):
        mock_session.execute.return_value = result_with(None)
        tenant = Tenant.create("Acme")

        await repository.save(tenant)

        added = mock_session.add.call_args.args[0]
        assert isinstance(added, TenantModel)
        assert added.name == "Acme"
        mock_session.flush.assert_awaited_once()
        mock_probe.tenant_saved.assert_called_once_with(tenant.id.value)

    @pytest.mark.asyncio
    async def test_save_updates_name(self, repository, mock_session):
        tenant = Tenant.create("Renamed")
        model = TenantModel(id=tenant.id.value, name="Old")
        mock_session.execute.return_value = result_with(model)

        await repository.save(tenant)

        assert model.name == "Renamed"
        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_by_id_returns_none_when_missing(self, repository, mock_session):
        mock_session.execute.return_value = result_with(None)

        assert await repository.get_by_id(TenantId.generate()) is None

    @pytest.mark.asyncio
    async def test_get_by_id_maps_model(self, repository, mock_session):
        tenant_id = TenantId.generate()
        mock_session.execute.return_value = result_with(
            TenantModel(id=tenant_id.value, name="Acme")
        )

        tenant = await repository.get_by_id(tenant_id)

        assert tenant == Tenant(id=tenant_id, name="Acme")

    @pytest.mark.asyncio
    async def test_delete_removes_row(self, repository, mock_session, mock_probe):
        tenant = Tenant.create("Acme")
        model = TenantModel(id=tenant.id.value, name="Acme")
        mock_session.execute.return_value = result_with(model)

        assert await repository.delete(tenant) is True
        mock_session.delete.assert_awaited_once_with(model)
        mock_probe.tenant_deleted.assert_called_once_with(tenant.id.value)
