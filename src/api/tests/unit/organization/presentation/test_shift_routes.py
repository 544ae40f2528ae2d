"""Unit tests for shift and shift template routes."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from organization.application.services import ShiftService, ShiftTemplateService
from organization.domain.aggregates import Shift, ShiftTemplate
from organization.domain.exceptions import InvalidShiftError
from organization.domain.value_objects import ShiftId, ShiftTemplateId
from organization.ports.exceptions import (
    InvalidShiftReferenceError,
    ShiftConflictError,
    ShiftNotFoundError,
    ShiftTemplateNotFoundError,
)
from shared_kernel.membership import MembershipRevokedError

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
MEMBERSHIP_ID = "01JMMMMMMMMMMMMMMMMMMMMMMM"
SHIFT_ID = "01JSSSSSSSSSSSSSSSSSSSSSSS"
TEMPLATE_ID = "01JTTTTTTTTTTTTTTTTTTTTTTT"

NINE = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
FIVE = datetime(2026, 10, 19, 17, 0, tzinfo=timezone.utc)

SHIFT_BODY = {
    "membership_id": MEMBERSHIP_ID,
    "starts_at": "2026-10-19T09:00:00Z",
    "ends_at": "2026-10-19T17:00:00Z",
}


@pytest.fixture
def mock_shift_service() -> AsyncMock:
    return AsyncMock(spec=ShiftService)


@pytest.fixture
def mock_template_service() -> AsyncMock:
    return AsyncMock(spec=ShiftTemplateService)


@pytest.fixture
def test_client(mock_shift_service, mock_template_service, tenant_context) -> TestClient:
    from iam.dependencies.tenant_context import get_tenant_context
    from organization.dependencies.shift import (
        get_shift_service,
        get_shift_template_service,
    )
    from organization.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_tenant_context] = lambda: tenant_context
    app.dependency_overrides[get_shift_service] = lambda: mock_shift_service
    app.dependency_overrides[get_shift_template_service] = (
        lambda: mock_template_service
    )
    app.include_router(router)

    return TestClient(app)


def _shift() -> Shift:
    return Shift(
        id=ShiftId(SHIFT_ID),
        tenant_id=TENANT_A,
        membership_id=MEMBERSHIP_ID,
        starts_at=NINE,
        ends_at=FIVE,
    )


class TestShiftRoutes:
    def test_create(self, test_client, mock_shift_service, tenant_context):
        mock_shift_service.create.return_value = _shift()

        response = test_client.post("/organization/shifts", json=SHIFT_BODY)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["id"] == SHIFT_ID
        assert body["membership_id"] == MEMBERSHIP_ID
        kwargs = mock_shift_service.create.call_args.kwargs
        assert kwargs["starts_at"] == NINE
        assert kwargs["ends_at"] == FIVE

    def test_naive_times_are_rejected(self, test_client, mock_shift_service):
        response = test_client.post(
            "/organization/shifts",
            json={**SHIFT_BODY, "starts_at": "2026-10-19T09:00:00"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_shift_service.create.assert_not_called()

    def test_overlap_is_409(self, test_client, mock_shift_service):
        mock_shift_service.create.side_effect = ShiftConflictError(MEMBERSHIP_ID)

        response = test_client.post("/organization/shifts", json=SHIFT_BODY)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == (
            "This member is already scheduled during this time"
        )

    @pytest.mark.parametrize(
        "error",
        [
            InvalidShiftError("Shift must end after it starts"),
            InvalidShiftReferenceError("member"),
        ],
    )
    def test_invalid_shift_is_422(self, test_client, mock_shift_service, error):
        mock_shift_service.create.side_effect = error

        response = test_client.post("/organization/shifts", json=SHIFT_BODY)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_revoked_actor_is_403(self, test_client, mock_shift_service):
        mock_shift_service.update.side_effect = MembershipRevokedError()

        response = test_client.put(f"/organization/shifts/{SHIFT_ID}", json=SHIFT_BODY)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_unknown_shift_is_404(self, test_client, mock_shift_service):
        mock_shift_service.update.side_effect = ShiftNotFoundError(SHIFT_ID)

        response = test_client.put(f"/organization/shifts/{SHIFT_ID}", json=SHIFT_BODY)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Shift not found"

    def test_list_passes_window(self, test_client, mock_shift_service, tenant_context):
        mock_shift_service.list.return_value = [_shift()]

        response = test_client.get(
            "/organization/shifts",
            params={"from": "2026-10-19T00:00:00Z", "to": "2026-10-26T00:00:00Z"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert [s["id"] for s in response.json()] == [SHIFT_ID]
        _, window_start, window_end = mock_shift_service.list.call_args.args
        assert window_start == datetime(2026, 10, 19, tzinfo=timezone.utc)
        assert window_end == datetime(2026, 10, 26, tzinfo=timezone.utc)

    def test_delete(self, test_client, mock_shift_service, tenant_context):
        response = test_client.delete(f"/organization/shifts/{SHIFT_ID}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_shift_service.delete.assert_awaited_once_with(tenant_context, SHIFT_ID)


class TestShiftTemplateRoutes:
    def test_create(self, test_client, mock_template_service):
        mock_template_service.create.return_value = ShiftTemplate(
            id=ShiftTemplateId(TEMPLATE_ID),
            tenant_id=TENANT_A,
            name="Morning",
            start_time="06:00",
            end_time="14:00",
        )

        response = test_client.post(
            "/organization/shift-templates",
            json={"name": "Morning", "start_time": "06:00", "end_time": "14:00"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {
            "id": TEMPLATE_ID,
            "name": "Morning",
            "start_time": "06:00",
            "end_time": "14:00",
            "role_id": None,
            "location_id": None,
        }

    def test_delete_unknown_template(self, test_client, mock_template_service):
        mock_template_service.delete.side_effect = ShiftTemplateNotFoundError(
            TEMPLATE_ID
        )

        response = test_client.delete(f"/organization/shift-templates/{TEMPLATE_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_with_foreign_role_is_422(self, test_client, mock_template_service):
        mock_template_service.update.side_effect = InvalidShiftReferenceError("role")

        response = test_client.put(
            f"/organization/shift-templates/{TEMPLATE_ID}",
            json={
                "name": "Morning",
                "start_time": "06:00",
                "end_time": "14:00",
                "role_id": "01JRRRRRRRRRRRRRRRRRRRRRRR",
            },
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"] == "Unknown role for this company"
