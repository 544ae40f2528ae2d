"""Location dependency providers for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.membership import get_membership_checker
from infrastructure.database.dependencies import get_write_session
from infrastructure.invalidation.dependencies import get_invalidation_publisher
from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher
from organization.application.observability import (
    DefaultLocationServiceProbe,
    LocationServiceProbe,
)
from organization.application.services import LocationService
from organization.infrastructure.location_repository import LocationRepository
from shared_kernel.membership import MembershipChecker


def get_location_service_probe() -> LocationServiceProbe:
    return DefaultLocationServiceProbe()


def get_location_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> LocationRepository:
    return LocationRepository(session=session)


def get_location_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    repository: Annotated[LocationRepository, Depends(get_location_repository)],
    membership_checker: Annotated[MembershipChecker, Depends(get_membership_checker)],
    publisher: Annotated[
        PostgresNotifyInvalidationPublisher, Depends(get_invalidation_publisher)
    ],
    probe: Annotated[LocationServiceProbe, Depends(get_location_service_probe)],
) -> LocationService:
    """Get LocationService instance."""
    return LocationService(
        session=session,
        location_repository=repository,
        membership_checker=membership_checker,
        invalidation_publisher=publisher,
        probe=probe,
    )
