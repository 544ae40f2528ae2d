"""Membership dependency providers for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultMembershipServiceProbe,
    MembershipServiceProbe,
)
from iam.application.services import MembershipService
from iam.infrastructure.membership_repository import MembershipRepository
from iam.infrastructure.role_reference_checker import SqlRoleReferenceChecker
from infrastructure.database.dependencies import get_write_session
from infrastructure.invalidation.dependencies import get_invalidation_publisher
from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher
from shared_kernel.membership import MembershipChecker


def get_membership_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> MembershipRepository:
    """Get MembershipRepository bound to the write session."""
    return MembershipRepository(session=session)


def get_membership_checker(
    repository: Annotated[MembershipRepository, Depends(get_membership_repository)],
) -> MembershipChecker:
    """Expose membership checks to other bounded contexts.

    Bound to the write session so the check runs inside the mutating
    transaction of the caller.
    """
    return repository


def get_membership_service_probe() -> MembershipServiceProbe:
    return DefaultMembershipServiceProbe()


def get_membership_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    repository: Annotated[MembershipRepository, Depends(get_membership_repository)],
    publisher: Annotated[
        PostgresNotifyInvalidationPublisher, Depends(get_invalidation_publisher)
    ],
    probe: Annotated[MembershipServiceProbe, Depends(get_membership_service_probe)],
) -> MembershipService:
    """Get MembershipService instance."""
    return MembershipService(
        session=session,
        membership_repository=repository,
        role_reference_checker=SqlRoleReferenceChecker(session=session),
        invalidation_publisher=publisher,
        probe=probe,
    )
