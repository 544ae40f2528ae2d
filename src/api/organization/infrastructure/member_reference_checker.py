"""Checks member references against the memberships table.

Memberships are owned by the IAM context. Scheduling only needs to know
whether a shift may point at a membership, which is a single filtered
existence query on the shared schema.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from organization.ports.repositories import IMemberReferenceChecker

_MEMBERSHIP_IN_TENANT = text(
    "SELECT 1 FROM memberships "
    "WHERE id = :membership_id AND tenant_id = :tenant_id LIMIT 1"
)


class SqlMemberReferenceChecker(IMemberReferenceChecker):
    """Answers membership-in-tenant questions with a single SQL query."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, membership_id: str, tenant_id: str) -> bool:
        result = await self._session.execute(
            _MEMBERSHIP_IN_TENANT,
            {"membership_id": membership_id, "tenant_id": tenant_id},
        )
        return result.scalar_one_or_none() is not None
