"""IAM presentation layer - aggregate-based organization.

Organizes presentation concerns by resource (context, tenants, members)
following vertical slicing. Each package contains its own routes and
models.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import context, members, tenants

# Auth is enforced per-endpoint: tenant creation and listing only need an
# authenticated principal, everything else needs a resolved tenant context.
router = APIRouter(
    prefix="/iam",
    tags=["iam"],
)

router.include_router(context.router)
router.include_router(tenants.router)
router.include_router(members.router)

__all__ = ["router"]
