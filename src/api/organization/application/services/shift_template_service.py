"""Shift template management application service."""

from __future__ import annotations

from typing import NoReturn

from sqlalchemy.ext.asyncio import AsyncSession

from organization.application.observability import (
    DefaultShiftTemplateServiceProbe,
    ShiftTemplateServiceProbe,
)
from organization.domain.aggregates import ShiftTemplate
from organization.domain.value_objects import LocationId, RoleId, ShiftTemplateId
from organization.ports.exceptions import (
    InvalidShiftReferenceError,
    ShiftTemplateNotFoundError,
)
from organization.ports.repositories import (
    ILocationRepository,
    IRoleRepository,
    IShiftTemplateRepository,
)
from shared_kernel.invalidation import InvalidationScope, TenantInvalidationPublisher
from shared_kernel.membership import MembershipChecker, MembershipRevokedError
from shared_kernel.middleware.tenant_context import TenantContext


class ShiftTemplateService:
    """Application service for a tenant's shift templates.

    Templates feed the schedule view, so changes are published under the
    shift scope.
    """

    def __init__(
        self,
        session: AsyncSession,
        template_repository: IShiftTemplateRepository,
        role_repository: IRoleRepository,
        location_repository: ILocationRepository,
        membership_checker: MembershipChecker,
        invalidation_publisher: TenantInvalidationPublisher,
        probe: ShiftTemplateServiceProbe | None = None,
    ):
        self._session = session
        self._template_repository = template_repository
        self._role_repository = role_repository
        self._location_repository = location_repository
        self._membership_checker = membership_checker
        self._invalidation_publisher = invalidation_publisher
        self._probe = probe or DefaultShiftTemplateServiceProbe()

    async def list(self, context: TenantContext) -> list[ShiftTemplate]:
        templates = await self._template_repository.list_for_tenant(
            context.tenant_id
        )
        self._probe.templates_listed(context.tenant_id, len(templates))
        return templates

    async def create(
        self,
        context: TenantContext,
        name: str,
        start_time: str,
        end_time: str,
        role_id: str | None = None,
        location_id: str | None = None,
    ) -> ShiftTemplate:
        template = ShiftTemplate.create(
            tenant_id=context.tenant_id,
            name=name,
            start_time=start_time,
            end_time=end_time,
        )

        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            template.role_id = await self._resolve_role(context, role_id)
            template.location_id = await self._resolve_location(context, location_id)
            await self._template_repository.save(template)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.SHIFT
            )

        self._probe.template_created(
            context.tenant_id, template.id.value, template.name
        )
        return template

    async def update(
        self,
        context: TenantContext,
        template_id: str,
        name: str,
        start_time: str,
        end_time: str,
        role_id: str | None = None,
        location_id: str | None = None,
    ) -> ShiftTemplate:
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            template = await self._load(context, template_id)
            template.update(
                name=name,
                start_time=start_time,
                end_time=end_time,
                role_id=await self._resolve_role(context, role_id),
                location_id=await self._resolve_location(context, location_id),
            )
            await self._template_repository.save(template)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.SHIFT
            )

        self._probe.template_updated(
            context.tenant_id, template.id.value, template.name
        )
        return template

    async def delete(self, context: TenantContext, template_id: str) -> None:
        async with self._session.begin():
            await self._ensure_actor_is_member(context)
            template = await self._load(context, template_id)
            await self._template_repository.delete(template)
            await self._invalidation_publisher.publish(
                context.tenant_id, InvalidationScope.SHIFT
            )

        self._probe.template_deleted(context.tenant_id, template.id.value)

    async def _resolve_role(
        self, context: TenantContext, role_id: str | None
    ) -> str | None:
        if role_id is None:
            return None
        try:
            rid = RoleId.from_string(role_id)
        except ValueError as e:
            self._reject_reference(context, "role", role_id, e)
        if await self._role_repository.get_by_id(rid, context.tenant_id) is None:
            self._reject_reference(context, "role", role_id)
        return rid.value

    async def _resolve_location(
        self, context: TenantContext, location_id: str | None
    ) -> str | None:
        if location_id is None:
            return None
        try:
            lid = LocationId.from_string(location_id)
        except ValueError as e:
            self._reject_reference(context, "location", location_id, e)
        if await self._location_repository.get_by_id(lid, context.tenant_id) is None:
            self._reject_reference(context, "location", location_id)
        return lid.value

    def _reject_reference(
        self,
        context: TenantContext,
        field: str,
        value: str,
        cause: Exception | None = None,
    ) -> NoReturn:
        self._probe.invalid_reference(context.tenant_id, field, value)
        raise InvalidShiftReferenceError(field) from cause

    async def _load(
        self, context: TenantContext, template_id: str
    ) -> ShiftTemplate:
        try:
            tid = ShiftTemplateId.from_string(template_id)
        except ValueError as e:
            self._probe.template_not_found(context.tenant_id, template_id)
            raise ShiftTemplateNotFoundError(template_id) from e

        template = await self._template_repository.get_by_id(tid, context.tenant_id)
        if template is None:
            self._probe.template_not_found(context.tenant_id, tid.value)
            raise ShiftTemplateNotFoundError(template_id)
        return template

    async def _ensure_actor_is_member(self, context: TenantContext) -> None:
        if not await self._membership_checker.is_member(
            context.principal.id, context.tenant_id
        ):
            self._probe.actor_membership_revoked(
                context.tenant_id, context.principal.id
            )
            raise MembershipRevokedError()
