"""Role dependency providers for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.membership import get_membership_checker
from infrastructure.database.dependencies import get_write_session
from infrastructure.invalidation.dependencies import get_invalidation_publisher
from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher
from organization.application.observability import (
    DefaultRoleServiceProbe,
    RoleServiceProbe,
)
from organization.application.services import RoleService
from organization.infrastructure.role_repository import RoleRepository
from shared_kernel.membership import MembershipChecker


def get_role_service_probe() -> RoleServiceProbe:
    return DefaultRoleServiceProbe()


def get_role_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> RoleRepository:
    """Get RoleRepository bound to the write session."""
    return RoleRepository(session=session)


def get_role_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    repository: Annotated[RoleRepository, Depends(get_role_repository)],
    membership_checker: Annotated[MembershipChecker, Depends(get_membership_checker)],
    publisher: Annotated[
        PostgresNotifyInvalidationPublisher, Depends(get_invalidation_publisher)
    ],
    probe: Annotated[RoleServiceProbe, Depends(get_role_service_probe)],
) -> RoleService:
    """Get RoleService instance.

    Repository, membership checker and publisher share one write session,
    so the membership re-check and the invalidation belong to the
    mutation's transaction.
    """
    return RoleService(
        session=session,
        role_repository=repository,
        membership_checker=membership_checker,
        invalidation_publisher=publisher,
        probe=probe,
    )
