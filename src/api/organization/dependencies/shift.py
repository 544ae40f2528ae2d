"""Shift and shift template dependency providers for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.membership import get_membership_checker
from infrastructure.database.dependencies import get_write_session
from infrastructure.invalidation.dependencies import get_invalidation_publisher
from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher
from organization.application.observability import (
    DefaultShiftServiceProbe,
    DefaultShiftTemplateServiceProbe,
    ShiftServiceProbe,
    ShiftTemplateServiceProbe,
)
from organization.application.services import ShiftService, ShiftTemplateService
from organization.dependencies.location import get_location_repository
from organization.dependencies.role import get_role_repository
from organization.infrastructure.location_repository import LocationRepository
from organization.infrastructure.member_reference_checker import (
    SqlMemberReferenceChecker,
)
from organization.infrastructure.role_repository import RoleRepository
from organization.infrastructure.shift_repository import ShiftRepository
from organization.infrastructure.shift_template_repository import (
    ShiftTemplateRepository,
)
from shared_kernel.membership import MembershipChecker


def get_shift_service_probe() -> ShiftServiceProbe:
    return DefaultShiftServiceProbe()


def get_shift_template_service_probe() -> ShiftTemplateServiceProbe:
    return DefaultShiftTemplateServiceProbe()


def get_shift_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    location_repository: Annotated[
        LocationRepository, Depends(get_location_repository)
    ],
    membership_checker: Annotated[MembershipChecker, Depends(get_membership_checker)],
    publisher: Annotated[
        PostgresNotifyInvalidationPublisher, Depends(get_invalidation_publisher)
    ],
    probe: Annotated[ShiftServiceProbe, Depends(get_shift_service_probe)],
) -> ShiftService:
    """Get ShiftService instance."""
    return ShiftService(
        session=session,
        shift_repository=ShiftRepository(session=session),
        location_repository=location_repository,
        member_reference_checker=SqlMemberReferenceChecker(session=session),
        membership_checker=membership_checker,
        invalidation_publisher=publisher,
        probe=probe,
    )


def get_shift_template_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    role_repository: Annotated[RoleRepository, Depends(get_role_repository)],
    location_repository: Annotated[
        LocationRepository, Depends(get_location_repository)
    ],
    membership_checker: Annotated[MembershipChecker, Depends(get_membership_checker)],
    publisher: Annotated[
        PostgresNotifyInvalidationPublisher, Depends(get_invalidation_publisher)
    ],
    probe: Annotated[
        ShiftTemplateServiceProbe, Depends(get_shift_template_service_probe)
    ],
) -> ShiftTemplateService:
    """Get ShiftTemplateService instance."""
    return ShiftTemplateService(
        session=session,
        template_repository=ShiftTemplateRepository(session=session),
        role_repository=role_repository,
        location_repository=location_repository,
        membership_checker=membership_checker,
        invalidation_publisher=publisher,
        probe=probe,
    )
