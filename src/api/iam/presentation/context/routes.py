"""HTTP routes for the tenant context of the current principal."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, StreamingResponse

from iam.application.services import TenantSwitchService
from iam.application.value_objects import TenantSwitched, TenantSwitchUnchanged
from iam.dependencies.authentication import get_current_principal
from iam.dependencies.tenant import get_tenant_switch_service
from iam.dependencies.tenant_context import (
    StillMemberCheck,
    get_preference_codec,
    get_preference_cookie,
    get_stream_membership_check,
    get_stream_tenant_context,
    get_tenant_context,
)
from iam.ports.identity import PreferenceCodec
from iam.presentation.context.models import (
    SwitchTenantRequest,
    SwitchTenantResponse,
    TenantContextResponse,
)
from iam.presentation.cookies import (
    clear_preference_cookie,
    read_preferred_tenant_id,
    set_preference_cookie,
)
from infrastructure.invalidation.dependencies import get_invalidation_broadcaster
from infrastructure.settings import get_tenancy_settings
from shared_kernel.invalidation import InvalidationBroadcaster
from shared_kernel.middleware.tenant_context import (
    AuthorizationDenied,
    Principal,
    TenantContext,
)

router = APIRouter(
    prefix="/context",
    tags=["context"],
)

KEEPALIVE_SECONDS = 15.0


@router.get("")
async def get_context(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
) -> TenantContextResponse:
    """Return the resolved tenant context of the caller.

    Clients render the company switcher from ``tenants`` and scope every
    view to ``active_tenant``.
    """
    return TenantContextResponse.from_domain(context)


@router.post(
    "/active-tenant",
    responses={
        200: {"description": "Active tenant switched or already active"},
        403: {"description": "Not a member of the requested tenant"},
    },
)
async def switch_active_tenant(
    request: SwitchTenantRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    raw_preference: Annotated[str | None, Depends(get_preference_cookie)],
    codec: Annotated[PreferenceCodec, Depends(get_preference_codec)],
    service: Annotated[TenantSwitchService, Depends(get_tenant_switch_service)],
) -> Response:
    """Make another tenant the caller's active tenant.

    The preference cookie is only rewritten when the tenant actually
    changes. A rejected switch leaves it untouched, unless it pointed at
    the rejected tenant, in which case it is cleared.
    """
    settings = get_tenancy_settings()
    current = read_preferred_tenant_id(raw_preference, principal.id, codec)

    outcome = await service.switch(principal, request.tenant_id, current)

    match outcome:
        case TenantSwitched(tenant_id=tenant_id):
            response = JSONResponse(
                SwitchTenantResponse(status="switched", tenant_id=tenant_id).model_dump()
            )
            set_preference_cookie(
                response, codec.encode(principal.id, tenant_id), settings
            )
            return response
        case TenantSwitchUnchanged(tenant_id=tenant_id):
            return JSONResponse(
                SwitchTenantResponse(status="unchanged", tenant_id=tenant_id).model_dump()
            )
        case AuthorizationDenied(reason=reason, clear_preference=clear):
            response = JSONResponse(
                {"detail": reason}, status_code=status.HTTP_403_FORBIDDEN
            )
            if clear:
                clear_preference_cookie(response, settings)
            return response


@router.delete(
    "/active-tenant",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def clear_active_tenant(
    _: Annotated[Principal, Depends(get_current_principal)],
) -> Response:
    """Forget the caller's active-tenant preference."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_preference_cookie(response, get_tenancy_settings())
    return response


@router.get("/invalidations")
async def stream_invalidations(
    request: Request,
    context: Annotated[TenantContext, Depends(get_stream_tenant_context)],
    still_member: Annotated[StillMemberCheck, Depends(get_stream_membership_check)],
    broadcaster: Annotated[
        InvalidationBroadcaster, Depends(get_invalidation_broadcaster)
    ],
) -> StreamingResponse:
    """Stream invalidation signals of the active tenant as server-sent events.

    Each event names the scope that changed; clients refetch the affected
    views. Only the tenant resolved for this request is streamed. No
    database session stays open while streaming: membership is re-read
    on a fresh session at every keepalive, and a `revoked` event ends the
    stream once the principal no longer belongs to the tenant.
    """
    tenant_id = context.tenant_id

    async def events() -> AsyncIterator[str]:
        async with broadcaster.subscription(tenant_id) as subscription:
            yield ": connected\n\n"
            while not await request.is_disconnected():
                try:
                    signal = await asyncio.wait_for(
                        subscription.get(), timeout=KEEPALIVE_SECONDS
                    )
                except TimeoutError:
                    if not await still_member():
                        revoked = json.dumps({"tenant_id": tenant_id})
                        yield f"event: revoked\ndata: {revoked}\n\n"
                        return
                    yield ": keepalive\n\n"
                    continue
                yield f"event: invalidate\ndata: {json.dumps(signal.to_dict())}\n\n"

    return StreamingResponse(
        events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
