"""Tenant context FastAPI dependency.

Resolves the active tenant of the request from the access token, the
principal's memberships and the active-tenant preference cookie.

FastAPI caches dependency results per request, so every dependency and
route that asks for the tenant context within one request shares a
single resolution.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        context: Annotated[TenantContext, Depends(get_tenant_context)],
    ):
        # context.active_tenant.id is the resolved tenant
        ...
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.application.tenant_context import TenantContextResolver
from iam.dependencies.authentication import (
    get_access_token,
    get_identity_provider,
    not_authenticated_exception,
)
from iam.infrastructure.membership_repository import MembershipRepository
from iam.infrastructure.preference_codec import ActiveTenantPreferenceCodec
from iam.ports.exceptions import TenantAccessVerificationError
from iam.ports.identity import IdentityProvider, PreferenceCodec
from infrastructure.database.dependencies import (
    get_read_session,
    get_read_sessionmaker,
)
from infrastructure.settings import get_tenancy_settings
from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import (
    NoTenant,
    NotAuthenticated,
    TenantContext,
    TenantResolution,
    TransientFailure,
)


@lru_cache
def get_preference_codec() -> PreferenceCodec:
    """Get the cached active-tenant preference codec."""
    settings = get_tenancy_settings()
    return ActiveTenantPreferenceCodec(
        secret=settings.preference_signing_secret.get_secret_value(),
        max_age=settings.preference_max_age,
    )


def get_tenant_context_probe() -> TenantContextProbe:
    """Get TenantContextProbe instance."""
    return DefaultTenantContextProbe()


def get_preference_cookie(request: Request) -> str | None:
    """Read the raw active-tenant preference cookie."""
    return request.cookies.get(get_tenancy_settings().preference_cookie_name)


def get_tenant_context_resolver(
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    session: Annotated[AsyncSession, Depends(get_read_session)],
    codec: Annotated[PreferenceCodec, Depends(get_preference_codec)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantContextResolver:
    """Get a resolver reading memberships through the read-only session."""
    return TenantContextResolver(
        identity_provider=identity_provider,
        membership_repository=MembershipRepository(session=session),
        preference_codec=codec,
        probe=probe,
    )


async def get_tenant_resolution(
    token: Annotated[str | None, Depends(get_access_token)],
    raw_preference: Annotated[str | None, Depends(get_preference_cookie)],
    resolver: Annotated[TenantContextResolver, Depends(get_tenant_context_resolver)],
) -> TenantResolution:
    """Resolve the request's tenant context without raising."""
    return await resolver.resolve(token=token, raw_preference=raw_preference)


def get_tenant_context(
    resolution: Annotated[TenantResolution, Depends(get_tenant_resolution)],
) -> TenantContext:
    """Require a resolved tenant context."""
    return require_tenant_context(resolution)


def require_tenant_context(resolution: TenantResolution) -> TenantContext:
    """Map a resolution to a tenant context or the matching HTTP error.

    Raises:
        HTTPException 401: Not authenticated, with a sign-in redirect hint
        HTTPException 409: No tenant yet, with an onboarding redirect hint
        TenantAccessVerificationError: A collaborator failed (mapped to 503)
    """
    match resolution:
        case TenantContext():
            return resolution
        case NotAuthenticated():
            raise not_authenticated_exception()
        case NoTenant():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Create or join a company to continue",
                headers={"X-Redirect-To": get_tenancy_settings().onboarding_path},
            )
        case TransientFailure(collaborator=collaborator, error_type=error_type):
            raise TenantAccessVerificationError(collaborator, error_type)
    raise TenantAccessVerificationError("membership", type(resolution).__name__)


StillMemberCheck = Callable[[], Awaitable[bool]]


async def get_stream_tenant_context(
    token: Annotated[str | None, Depends(get_access_token)],
    raw_preference: Annotated[str | None, Depends(get_preference_cookie)],
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_read_sessionmaker)
    ],
    codec: Annotated[PreferenceCodec, Depends(get_preference_codec)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> TenantContext:
    """Resolve the tenant context on a session closed before returning.

    Streaming responses outlive the request scope; resolving through
    ``get_read_session`` would pin a pooled connection until the client
    disconnects.
    """
    async with sessionmaker() as session:
        resolver = TenantContextResolver(
            identity_provider=identity_provider,
            membership_repository=MembershipRepository(session=session),
            preference_codec=codec,
            probe=probe,
        )
        resolution = await resolver.resolve(token=token, raw_preference=raw_preference)
    return require_tenant_context(resolution)


def get_stream_membership_check(
    context: Annotated[TenantContext, Depends(get_stream_tenant_context)],
    sessionmaker: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_read_sessionmaker)
    ],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
) -> StillMemberCheck:
    """Build a check that the streaming principal still belongs to the tenant.

    Every call reads on a fresh session that is closed before returning.
    A failed read counts as lost membership so the stream ends and the
    client reconnects through regular resolution.
    """
    principal_id = context.principal.id
    tenant_id = context.tenant_id

    async def still_member() -> bool:
        try:
            async with sessionmaker() as session:
                is_member = await MembershipRepository(session=session).is_member(
                    principal_id, tenant_id
                )
        except Exception as e:
            probe.collaborator_failed("membership", e, principal_id=principal_id)
            return False
        if not is_member:
            probe.stream_membership_lost(tenant_id=tenant_id, principal_id=principal_id)
        return is_member

    return still_member
