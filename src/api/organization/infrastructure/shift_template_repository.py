"""PostgreSQL implementation of IShiftTemplateRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from organization.domain.aggregates import ShiftTemplate
from organization.domain.value_objects import ShiftTemplateId
from organization.infrastructure.models import ShiftTemplateModel
from organization.infrastructure.observability import (
    DefaultOrganizationRepositoryProbe,
    OrganizationRepositoryProbe,
)
from organization.ports.repositories import IShiftTemplateRepository


class ShiftTemplateRepository(IShiftTemplateRepository):
    """Repository managing PostgreSQL storage for ShiftTemplate aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: OrganizationRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultOrganizationRepositoryProbe()

    async def save(self, template: ShiftTemplate) -> None:
        model = await self._get_model(template.id.value, template.tenant_id)

        if model:
            model.name = template.name
            model.role_id = template.role_id
            model.location_id = template.location_id
            model.start_time = template.start_time
            model.end_time = template.end_time
        else:
            self._session.add(
                ShiftTemplateModel(
                    id=template.id.value,
                    tenant_id=template.tenant_id,
                    name=template.name,
                    role_id=template.role_id,
                    location_id=template.location_id,
                    start_time=template.start_time,
                    end_time=template.end_time,
                )
            )

        await self._session.flush()
        self._probe.entity_saved(
            "shift_template", template.id.value, template.tenant_id
        )

    async def get_by_id(
        self, template_id: ShiftTemplateId, tenant_id: str
    ) -> ShiftTemplate | None:
        model = await self._get_model(template_id.value, tenant_id)
        if model is None:
            return None
        return self._to_domain(model)

    async def list_for_tenant(self, tenant_id: str) -> list[ShiftTemplate]:
        stmt = (
            select(ShiftTemplateModel)
            .where(ShiftTemplateModel.tenant_id == tenant_id)
            .order_by(ShiftTemplateModel.name, ShiftTemplateModel.id)
        )
        result = await self._session.execute(stmt)
        templates = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.entities_listed("shift_template", tenant_id, len(templates))
        return templates

    async def delete(self, template: ShiftTemplate) -> bool:
        model = await self._get_model(template.id.value, template.tenant_id)
        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.entity_deleted(
            "shift_template", template.id.value, template.tenant_id
        )
        return True

    async def _get_model(
        self, template_id: str, tenant_id: str
    ) -> ShiftTemplateModel | None:
        stmt = select(ShiftTemplateModel).where(
            ShiftTemplateModel.id == template_id,
            ShiftTemplateModel.tenant_id == tenant_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: ShiftTemplateModel) -> ShiftTemplate:
        return ShiftTemplate(
            id=ShiftTemplateId(value=model.id),
            tenant_id=model.tenant_id,
            name=model.name,
            start_time=model.start_time,
            end_time=model.end_time,
            role_id=model.role_id,
            location_id=model.location_id,
        )
