"""Unit tests for ShiftRepository and ShiftTemplateRepository."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from organization.domain.aggregates import Shift, ShiftTemplate
from organization.domain.value_objects import ShiftId, ShiftTemplateId
from organization.infrastructure.models import ShiftModel, ShiftTemplateModel
from organization.infrastructure.shift_repository import ShiftRepository
from organization.infrastructure.shift_template_repository import (
    ShiftTemplateRepository,
)
from organization.ports.exceptions import ShiftConflictError

TENANT_A = "01JAAAAAAAAAAAAAAAAAAAAAAA"
MEMBERSHIP_ID = "01JMMMMMMMMMMMMMMMMMMMMMMM"
SHIFT_ID = "01JSSSSSSSSSSSSSSSSSSSSSSS"
TEMPLATE_ID = "01JTTTTTTTTTTTTTTTTTTTTTTT"

NINE = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
FIVE = datetime(2026, 10, 19, 17, 0, tzinfo=timezone.utc)


class _DriverError(Exception):
    """Mimics a DBAPI error carrying a SQLSTATE."""

    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.add = MagicMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session.execute.return_value = result
    return session


@pytest.fixture
def probe():
    return MagicMock()


def _shift() -> Shift:
    return Shift(
        id=ShiftId(SHIFT_ID),
        tenant_id=TENANT_A,
        membership_id=MEMBERSHIP_ID,
        starts_at=NINE,
        ends_at=FIVE,
    )


def _compiled(mock_session) -> str:
    return str(
        mock_session.execute.call_args.args[0].compile(
            dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
        )
    )


class TestShiftRepository:
    @pytest.mark.asyncio
    async def test_save_inserts(self, mock_session):
        await ShiftRepository(mock_session).save(_shift())

        added = mock_session.add.call_args.args[0]
        assert isinstance(added, ShiftModel)
        assert added.membership_id == MEMBERSHIP_ID
        assert added.tenant_id == TENANT_A
        mock_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_save_updates_existing_row(self, mock_session):
        model = ShiftModel(
            id=SHIFT_ID,
            tenant_id=TENANT_A,
            membership_id=MEMBERSHIP_ID,
            starts_at=NINE,
            ends_at=FIVE,
        )
        mock_session.execute.return_value.scalar_one_or_none.return_value = model
        shift = _shift()
        shift.notes = "Opening"

        await ShiftRepository(mock_session).save(shift)

        assert model.notes == "Opening"
        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_exclusion_violation_becomes_conflict(self, mock_session, probe):
        mock_session.flush.side_effect = IntegrityError(
            "INSERT INTO shifts",
            {},
            _DriverError(
                'conflicting key value violates exclusion constraint '
                '"ex_shifts_membership_id_during"',
                "23P01",
            ),
        )

        with pytest.raises(ShiftConflictError) as exc_info:
            await ShiftRepository(mock_session, probe=probe).save(_shift())

        assert exc_info.value.membership_id == MEMBERSHIP_ID
        probe.shift_overlap_rejected.assert_called_once_with(MEMBERSHIP_ID, TENANT_A)
        probe.entity_saved.assert_not_called()

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, mock_session):
        mock_session.flush.side_effect = IntegrityError(
            "INSERT INTO shifts",
            {},
            _DriverError('violates foreign key constraint "fk_x"', "23503"),
        )

        with pytest.raises(IntegrityError):
            await ShiftRepository(mock_session).save(_shift())

    @pytest.mark.asyncio
    async def test_list_filters_tenant_and_window(self, mock_session):
        mock_session.execute.return_value.scalars.return_value.all.return_value = []

        await ShiftRepository(mock_session).list_for_tenant(TENANT_A, NINE, FIVE)

        compiled = mock_session.execute.call_args.args[0].compile(
            dialect=postgresql.dialect()
        )
        sql = str(compiled)
        assert set(compiled.params.values()) == {TENANT_A, NINE, FIVE}
        assert "shifts.ends_at >" in sql
        assert "shifts.starts_at <" in sql
        assert "ORDER BY shifts.starts_at, shifts.id" in sql

    @pytest.mark.asyncio
    async def test_list_without_window_has_no_time_filter(self, mock_session):
        mock_session.execute.return_value.scalars.return_value.all.return_value = []

        await ShiftRepository(mock_session).list_for_tenant(TENANT_A)

        where = _compiled(mock_session).split("WHERE", 1)[1]
        assert "ends_at >" not in where
        assert "starts_at <" not in where

    @pytest.mark.asyncio
    async def test_get_by_id_is_tenant_scoped(self, mock_session):
        assert await ShiftRepository(mock_session).get_by_id(
            ShiftId(SHIFT_ID), TENANT_A
        ) is None

        sql = _compiled(mock_session)
        assert f"shifts.id = '{SHIFT_ID}'" in sql
        assert f"shifts.tenant_id = '{TENANT_A}'" in sql


class TestShiftTemplateRepository:
    @pytest.mark.asyncio
    async def test_save_inserts(self, mock_session):
        await ShiftTemplateRepository(mock_session).save(
            ShiftTemplate(
                id=ShiftTemplateId(TEMPLATE_ID),
                tenant_id=TENANT_A,
                name="Morning",
                start_time="06:00",
                end_time="14:00",
            )
        )

        added = mock_session.add.call_args.args[0]
        assert isinstance(added, ShiftTemplateModel)
        assert (added.start_time, added.end_time) == ("06:00", "14:00")

    @pytest.mark.asyncio
    async def test_list_is_tenant_scoped_and_ordered_by_name(self, mock_session):
        mock_session.execute.return_value.scalars.return_value.all.return_value = []

        await ShiftTemplateRepository(mock_session).list_for_tenant(TENANT_A)

        sql = _compiled(mock_session)
        assert f"shift_templates.tenant_id = '{TENANT_A}'" in sql
        assert "ORDER BY shift_templates.name, shift_templates.id" in sql
