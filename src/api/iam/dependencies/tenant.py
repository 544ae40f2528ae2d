"""Tenant dependency providers for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)
from iam.application.services import TenantService, TenantSwitchService
from iam.dependencies.membership import get_membership_repository
from iam.dependencies.tenant_context import get_tenant_context_probe
from iam.infrastructure.membership_repository import MembershipRepository
from iam.infrastructure.principal_repository import PrincipalRepository
from iam.infrastructure.tenant_repository import TenantRepository
from infrastructure.database.dependencies import get_read_session, get_write_session
from infrastructure.invalidation.dependencies import get_invalidation_publisher
from infrastructure.invalidation.publisher import PostgresNotifyInvalidationPublisher
from infrastructure.settings import get_tenancy_settings
from shared_kernel.middleware.observability import TenantContextProbe


def get_tenant_service_probe() -> TenantServiceProbe:
    """Get TenantServiceProbe instance."""
    return DefaultTenantServiceProbe()


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> TenantRepository:
    """Get TenantRepository bound to the write session."""
    return TenantRepository(session=session)


def get_principal_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> PrincipalRepository:
    """Get PrincipalRepository bound to the write session."""
    return PrincipalRepository(session=session)


def get_tenant_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    membership_repo: Annotated[
        MembershipRepository, Depends(get_membership_repository)
    ],
    principal_repo: Annotated[PrincipalRepository, Depends(get_principal_repository)],
    publisher: Annotated[
        PostgresNotifyInvalidationPublisher, Depends(get_invalidation_publisher)
    ],
    probe: Annotated[TenantServiceProbe, Depends(get_tenant_service_probe)],
) -> TenantService:
    """Get TenantService instance.

    All repositories share the request's write session via FastAPI
    dependency caching, so the service's transaction covers them all.
    """
    return TenantService(
        session=session,
        tenant_repository=tenant_repo,
        membership_repository=membership_repo,
        principal_repository=principal_repo,
        invalidation_publisher=publisher,
        probe=probe,
        max_tenants_per_principal=get_tenancy_settings().max_tenants_per_principal,
    )


def get_tenant_switch_service(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantSwitchService:
    """Get TenantSwitchService reading memberships through the read session."""
    return TenantSwitchService(
        membership_repository=MembershipRepository(session=session),
        probe=probe,
    )
