"""PostgreSQL implementation of IMembershipRepository.

Memberships are the single source of truth for "principal P belongs to
tenant T". Every lookup filters on equality of the identifiers involved;
nothing is inferred from other relations.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Membership
from iam.domain.value_objects import (
    MemberListing,
    MembershipId,
    MembershipView,
    PrincipalId,
    TenantId,
)
from iam.infrastructure.models import MembershipModel, PrincipalModel, TenantModel
from iam.infrastructure.observability import (
    DefaultMembershipRepositoryProbe,
    MembershipRepositoryProbe,
)
from iam.ports.repositories import IMembershipRepository


class MembershipRepository(IMembershipRepository):
    """PostgreSQL-backed repository for memberships.

    Also satisfies the shared ``MembershipChecker`` port through
    ``is_member`` so other contexts can re-validate access without
    depending on IAM types.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: MembershipRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultMembershipRepositoryProbe()

    async def save(self, membership: Membership) -> None:
        """Insert or update a membership.

        Args:
            membership: The Membership aggregate to persist
        """
        stmt = select(MembershipModel).where(
            MembershipModel.id == membership.id.value,
            MembershipModel.tenant_id == membership.tenant_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.display_name = membership.display_name
            model.role_id = membership.role_id
        else:
            model = MembershipModel(
                id=membership.id.value,
                tenant_id=membership.tenant_id.value,
                principal_id=membership.principal_id.value,
                display_name=membership.display_name,
                role_id=membership.role_id,
                created_at=membership.created_at,
            )
            self._session.add(model)

        await self._session.flush()
        self._probe.membership_saved(membership.id.value, membership.tenant_id.value)

    async def get_by_id(
        self, membership_id: MembershipId, tenant_id: TenantId
    ) -> Membership | None:
        """Fetch a membership of the given tenant.

        Returns:
            The Membership, or None if it does not exist in this tenant
        """
        stmt = select(MembershipModel).where(
            MembershipModel.id == membership_id.value,
            MembershipModel.tenant_id == tenant_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.membership_not_found(membership_id.value, tenant_id.value)
            return None

        return _to_domain(model)

    async def exists(self, principal_id: PrincipalId, tenant_id: TenantId) -> bool:
        """Check whether the principal belongs to the tenant."""
        return await self.is_member(principal_id.value, tenant_id.value)

    async def is_member(self, principal_id: str, tenant_id: str) -> bool:
        """Check membership using plain identifiers."""
        stmt = (
            select(MembershipModel.id)
            .where(
                MembershipModel.principal_id == principal_id,
                MembershipModel.tenant_id == tenant_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_tenants_for_principal(
        self, principal_id: PrincipalId
    ) -> list[MembershipView]:
        """List the principal's memberships joined with tenant names.

        Returns:
            Views ordered by membership creation time, then membership id
        """
        stmt = (
            select(MembershipModel, TenantModel.name)
            .join(TenantModel, TenantModel.id == MembershipModel.tenant_id)
            .where(MembershipModel.principal_id == principal_id.value)
            .order_by(MembershipModel.created_at.asc(), MembershipModel.id.asc())
        )
        result = await self._session.execute(stmt)

        views = [
            MembershipView(
                membership_id=model.id,
                principal_id=model.principal_id,
                tenant_id=model.tenant_id,
                tenant_name=tenant_name,
                role_id=model.role_id,
                created_at=model.created_at,
            )
            for model, tenant_name in result.all()
        ]

        self._probe.memberships_listed(principal_id.value, len(views))
        return views

    async def count_for_principal(self, principal_id: PrincipalId) -> int:
        """Count the tenants the principal belongs to."""
        stmt = (
            select(func.count())
            .select_from(MembershipModel)
            .where(MembershipModel.principal_id == principal_id.value)
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def list_members(self, tenant_id: TenantId) -> list[MemberListing]:
        """List members of a tenant, ordered by membership creation."""
        stmt = (
            select(MembershipModel, PrincipalModel.email)
            .join(PrincipalModel, PrincipalModel.id == MembershipModel.principal_id)
            .where(MembershipModel.tenant_id == tenant_id.value)
            .order_by(MembershipModel.created_at.asc(), MembershipModel.id.asc())
        )
        result = await self._session.execute(stmt)

        return [
            MemberListing(
                membership_id=model.id,
                principal_id=model.principal_id,
                display_name=model.display_name,
                email=email,
                role_id=model.role_id,
                created_at=model.created_at,
            )
            for model, email in result.all()
        ]

    async def delete(self, membership: Membership) -> bool:
        """Delete a membership.

        Returns:
            True if deleted, False if not found
        """
        stmt = select(MembershipModel).where(
            MembershipModel.id == membership.id.value,
            MembershipModel.tenant_id == membership.tenant_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()

        self._probe.membership_deleted(membership.id.value, membership.tenant_id.value)
        return True


def _to_domain(model: MembershipModel) -> Membership:
    return Membership(
        id=MembershipId(value=model.id),
        tenant_id=TenantId(value=model.tenant_id),
        principal_id=PrincipalId(value=model.principal_id),
        display_name=model.display_name,
        role_id=model.role_id,
        created_at=model.created_at,
    )
