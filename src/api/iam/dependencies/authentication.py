"""Authentication dependencies for FastAPI.

Access tokens are read from the Authorization header and, for browser
requests, from the access token cookie set by the hosted auth backend.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from iam.infrastructure.identity_provider import TokenIdentityProvider
from iam.ports.exceptions import TenantAccessVerificationError
from iam.ports.identity import IdentityProvider
from infrastructure.settings import get_auth_settings, get_tenancy_settings
from shared_kernel.auth import JWTValidator
from shared_kernel.auth.observability import DefaultJWTValidatorProbe
from shared_kernel.middleware.tenant_context import Principal

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached JWT validator.

    Uses lru_cache to ensure a single JWTValidator instance is reused across
    requests, enabling reuse of the instance-level JWKS cache.
    """
    settings = get_auth_settings()
    return JWTValidator(
        probe=DefaultJWTValidatorProbe(),
        audience=settings.audience,
        secret=settings.jwt_secret.get_secret_value() if settings.jwt_secret else None,
        jwks_url=settings.jwks_url,
        issuer=settings.issuer,
        jwks_cache_ttl=timedelta(seconds=settings.jwks_cache_ttl_seconds),
    )


def get_identity_provider(
    validator: Annotated[JWTValidator, Depends(get_jwt_validator)],
) -> IdentityProvider:
    """Get the identity provider adapter."""
    return TokenIdentityProvider(validator=validator)


def get_access_token(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> str | None:
    """Extract the access token from the Authorization header or cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(get_auth_settings().access_token_cookie)


def not_authenticated_exception() -> HTTPException:
    """401 response pointing the client at the sign-in page."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={
            "WWW-Authenticate": "Bearer",
            "X-Redirect-To": get_tenancy_settings().sign_in_path,
        },
    )


async def get_current_principal(
    token: Annotated[str | None, Depends(get_access_token)],
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> Principal:
    """Resolve the authenticated principal without requiring a tenant.

    Used by endpoints a principal may call before belonging to any
    tenant, such as creating their first company.

    Raises:
        HTTPException 401: If the request is not authenticated
        TenantAccessVerificationError: If the identity provider failed
    """
    try:
        principal = await identity_provider.get_principal(token)
    except Exception as e:
        raise TenantAccessVerificationError("identity", type(e).__name__) from e

    if principal is None:
        raise not_authenticated_exception()
    return principal
