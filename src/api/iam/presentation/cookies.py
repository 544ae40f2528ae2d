"""Active-tenant preference cookie helpers.

The cookie is HttpOnly, SameSite=Lax and scoped to the whole site. Its
value is the signed preference produced by the preference codec.
"""

from __future__ import annotations

from fastapi import Response

from iam.ports.exceptions import InvalidPreferenceError
from iam.ports.identity import PreferenceCodec
from infrastructure.settings import TenancySettings


def set_preference_cookie(
    response: Response,
    value: str,
    settings: TenancySettings,
) -> None:
    """Write the signed active-tenant preference."""
    response.set_cookie(
        settings.preference_cookie_name,
        value,
        max_age=settings.preference_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.preference_cookie_secure,
        samesite="lax",
    )


def clear_preference_cookie(response: Response, settings: TenancySettings) -> None:
    """Remove the active-tenant preference."""
    response.delete_cookie(
        settings.preference_cookie_name,
        path="/",
        httponly=True,
        secure=settings.preference_cookie_secure,
        samesite="lax",
    )


def read_preferred_tenant_id(
    raw: str | None,
    principal_id: str,
    codec: PreferenceCodec,
) -> str | None:
    """Decode the preference cookie, treating any invalid value as absent."""
    if not raw:
        return None
    try:
        return codec.decode(raw, principal_id)
    except InvalidPreferenceError:
        return None
