"""Unit tests for role routes."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from organization.application.services import RoleService
from organization.domain.aggregates import Role
from organization.domain.exceptions import InvalidRoleNameError
from organization.domain.value_objects import RoleId
from organization.ports.exceptions import RoleNotFoundError
from shared_kernel.membership import MembershipRevokedError

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
ROLE_ID = "01JRRRRRRRRRRRRRRRRRRRRRRR"


@pytest.fixture
def mock_role_service() -> AsyncMock:
    return AsyncMock(spec=RoleService)


@pytest.fixture
def test_client(mock_role_service, tenant_context) -> TestClient:
    from iam.dependencies.tenant_context import get_tenant_context
    from organization.dependencies.role import get_role_service
    from organization.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_tenant_context] = lambda: tenant_context
    app.dependency_overrides[get_role_service] = lambda: mock_role_service
    app.include_router(router)

    return TestClient(app)


def barista() -> Role:
    return Role(id=RoleId(ROLE_ID), tenant_id=TENANT_A, name="Barista")


class TestRoleRoutes:
    def test_list(self, test_client, mock_role_service, tenant_context):
        mock_role_service.list.return_value = [barista()]

        response = test_client.get("/organization/roles")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [{"id": ROLE_ID, "name": "Barista"}]
        mock_role_service.list.assert_awaited_once_with(tenant_context)

    def test_create(self, test_client, mock_role_service):
        mock_role_service.create.return_value = barista()

        response = test_client.post("/organization/roles", json={"name": "Barista"})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["id"] == ROLE_ID

    def test_create_with_blank_name(self, test_client, mock_role_service):
        mock_role_service.create.side_effect = InvalidRoleNameError(
            "Role name is required"
        )

        response = test_client.post("/organization/roles", json={"name": " "})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_after_losing_access(self, test_client, mock_role_service):
        mock_role_service.create.side_effect = MembershipRevokedError()

        response = test_client.post("/organization/roles", json={"name": "Barista"})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_rename_unknown_role(self, test_client, mock_role_service):
        mock_role_service.rename.side_effect = RoleNotFoundError(ROLE_ID)

        response = test_client.patch(
            f"/organization/roles/{ROLE_ID}", json={"name": "Lead"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Role not found"

    def test_delete(self, test_client, mock_role_service, tenant_context):
        response = test_client.delete(f"/organization/roles/{ROLE_ID}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_role_service.delete.assert_awaited_once_with(tenant_context, ROLE_ID)

    def test_delete_unknown_role(self, test_client, mock_role_service):
        mock_role_service.delete.side_effect = RoleNotFoundError(ROLE_ID)

        response = test_client.delete(f"/organization/roles/{ROLE_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
