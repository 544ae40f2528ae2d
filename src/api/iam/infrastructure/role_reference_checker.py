"""Checks role references against the roles table.

Roles are owned by the organization context. IAM only needs to know
whether a membership may point at a role, which is a single filtered
existence query on the shared schema.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from iam.ports.repositories import IRoleReferenceChecker

_ROLE_IN_TENANT = text(
    "SELECT 1 FROM roles WHERE id = :role_id AND tenant_id = :tenant_id LIMIT 1"
)


class SqlRoleReferenceChecker(IRoleReferenceChecker):
    """Answers role-in-tenant questions with a single SQL query."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, role_id: str, tenant_id: str) -> bool:
        result = await self._session.execute(
            _ROLE_IN_TENANT, {"role_id": role_id, "tenant_id": tenant_id}
        )
        return result.scalar_one_or_none() is not None
