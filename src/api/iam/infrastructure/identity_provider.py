"""Identity provider adapter backed by access token validation."""

from __future__ import annotations

from iam.ports.identity import IdentityProvider
from shared_kernel.auth import InvalidTokenError, JWTValidator
from shared_kernel.middleware.tenant_context import Principal


class TokenIdentityProvider(IdentityProvider):
    """Resolves principals from bearer access tokens.

    A missing or invalid token yields None. IdentityProviderUnavailableError
    from the validator propagates so callers can report a transient
    failure instead of "not signed in".
    """

    def __init__(self, validator: JWTValidator) -> None:
        self._validator = validator

    async def get_principal(self, token: str | None) -> Principal | None:
        if not token:
            return None

        try:
            claims = await self._validator.validate_token(token)
        except InvalidTokenError:
            return None

        return Principal(
            id=claims.sub,
            email=claims.email,
            display_name=claims.display_name,
        )
