"""PostgreSQL mirror of identity provider principals.

Principals are provisioned just in time: the first authenticated request
of a principal inserts its row, later requests refresh email and display
name when the provider reports new values.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.models import PrincipalModel
from iam.infrastructure.observability import (
    DefaultPrincipalRepositoryProbe,
    PrincipalRepositoryProbe,
)
from iam.ports.repositories import IPrincipalRepository
from shared_kernel.middleware.tenant_context import Principal


class PrincipalRepository(IPrincipalRepository):
    """PostgreSQL-backed principal mirror."""

    def __init__(
        self,
        session: AsyncSession,
        probe: PrincipalRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultPrincipalRepositoryProbe()

    async def ensure(self, principal: Principal) -> None:
        """Insert the principal or refresh its profile.

        Concurrent first requests of the same principal are tolerated: the
        insert is skipped if another transaction created the row first.
        """
        stmt = select(PrincipalModel).where(PrincipalModel.id == principal.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            insert_stmt = (
                insert(PrincipalModel)
                .values(
                    id=principal.id,
                    email=principal.email,
                    display_name=principal.display_name,
                )
                .on_conflict_do_nothing(index_elements=[PrincipalModel.id])
            )
            await self._session.execute(insert_stmt)
            self._probe.principal_provisioned(principal.id)
            return

        changed = False
        if principal.email and model.email != principal.email:
            model.email = principal.email
            changed = True
        if principal.display_name and model.display_name != principal.display_name:
            model.display_name = principal.display_name
            changed = True

        if changed:
            await self._session.flush()
            self._probe.principal_refreshed(principal.id)
