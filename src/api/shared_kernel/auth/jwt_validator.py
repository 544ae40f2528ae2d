"""JWT validation module for identity provider access tokens.

Validates access tokens issued by the hosted auth backend. Tokens are
either signed with a shared HS256 secret or with an asymmetric key
published in the provider's JWKS document, which is cached.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated JWT claims."""

    sub: str
    email: str | None
    display_name: str | None


class InvalidTokenError(Exception):
    """Raised when JWT validation fails."""

    pass


class IdentityProviderUnavailableError(Exception):
    """Raised when the identity provider's signing keys cannot be fetched.

    Unlike InvalidTokenError this says nothing about the token itself;
    the caller should treat it as a transient failure.
    """

    pass


ASYMMETRIC_ALGORITHMS = ["RS256", "ES256"]


class JWTValidator:
    """Validates access tokens with a shared secret or the provider's JWKS.

    When a shared secret is configured, tokens are verified with HS256 and
    no network access is needed. Otherwise the JWKS document is fetched
    from the configured URL and cached for the configured TTL.
    """

    def __init__(
        self,
        probe: JWTValidatorProbe,
        audience: str,
        secret: str | None = None,
        jwks_url: str | None = None,
        issuer: str | None = None,
        jwks_cache_ttl: timedelta = timedelta(hours=1),
        http_client_factory: Any = httpx.AsyncClient,
    ):
        """Initialize the JWT validator.

        Args:
            probe: Observability probe for logging events.
            audience: Expected audience claim value.
            secret: Shared HS256 secret. Takes precedence over jwks_url.
            jwks_url: URL of the provider's JWKS document.
            issuer: Expected issuer claim, or None to skip the check.
            jwks_cache_ttl: How long to cache JWKS keys (default: 1 hour).
            http_client_factory: Callable returning an async HTTP client
                usable as a context manager.
        """
        if secret is None and not jwks_url:
            raise ValueError("Either secret or jwks_url is required")

        self._probe = probe
        self._audience = audience
        self._secret = secret
        self._jwks_url = jwks_url
        self._issuer = issuer
        self._jwks_cache_ttl = jwks_cache_ttl
        self._http_client_factory = http_client_factory

        # JWKS cache
        self._jwks: dict[str, Any] | None = None
        self._jwks_fetched_at: datetime | None = None
        self._jwks_lock = asyncio.Lock()

    async def validate_token(self, token: str) -> TokenClaims:
        """Validate JWT and return claims.

        Args:
            token: The JWT token string.

        Returns:
            TokenClaims containing the validated claims.

        Raises:
            InvalidTokenError: If token is invalid, expired, or verification fails.
            IdentityProviderUnavailableError: If the JWKS cannot be fetched.
        """
        # First, do a quick check for malformed tokens
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError as e:
            self._probe.token_validation_failed(reason=f"Malformed token: {e}")
            raise InvalidTokenError(f"Invalid token format: {e}") from e

        if not unverified_header:
            self._probe.token_validation_failed(reason="Missing token header")
            raise InvalidTokenError("Invalid token: missing header")

        if self._secret is not None:
            key: Any = self._secret
            algorithms = ["HS256"]
        else:
            key = await self._get_jwks()
            algorithms = ASYMMETRIC_ALGORITHMS

        try:
            claims = jwt.decode(
                token=token,
                key=key,
                algorithms=algorithms,
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "verify_signature": True,
                    "verify_aud": True,
                    "verify_iss": self._issuer is not None,
                    "verify_exp": True,
                    "verify_iat": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.token_validation_failed(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            error_msg = str(e).lower()
            if "audience" in error_msg:
                self._probe.token_validation_failed(reason="Invalid audience")
                raise InvalidTokenError("Invalid audience claim") from e
            if "issuer" in error_msg:
                self._probe.token_validation_failed(reason="Invalid issuer")
                raise InvalidTokenError("Invalid issuer claim") from e
            self._probe.token_validation_failed(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            error_msg = str(e).lower()
            if "signature" in error_msg:
                self._probe.token_validation_failed(reason="Invalid signature")
                raise InvalidTokenError("Invalid token signature") from e
            self._probe.token_validation_failed(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

        user_id = claims.get("sub")
        if not user_id:
            self._probe.token_validation_failed(reason="Missing sub claim")
            raise InvalidTokenError("Missing required claim: sub")

        email = claims.get("email")

        self._probe.token_validated(
            user_id=str(user_id),
            algorithm=str(unverified_header.get("alg", "")),
        )

        return TokenClaims(
            sub=str(user_id),
            email=str(email) if email else None,
            display_name=_extract_display_name(claims),
        )

    async def _get_jwks(self) -> dict[str, Any]:
        """Get JWKS, fetching from the provider if the cache expired.

        Raises:
            IdentityProviderUnavailableError: If JWKS cannot be fetched.
        """
        # Check if cache is still valid (without lock for quick check)
        if self._is_cache_valid():
            self._probe.jwks_cache_hit()
            return self._jwks  # type: ignore[return-value]

        async with self._jwks_lock:
            # Double-check after acquiring lock
            if self._is_cache_valid():
                self._probe.jwks_cache_hit()
                return self._jwks  # type: ignore[return-value]

            return await self._fetch_jwks()

    def _is_cache_valid(self) -> bool:
        """Check if JWKS cache is still valid."""
        if self._jwks is None or self._jwks_fetched_at is None:
            return False

        now = datetime.now(tz=timezone.utc)
        return (now - self._jwks_fetched_at) < self._jwks_cache_ttl

    async def _fetch_jwks(self) -> dict[str, Any]:
        """Fetch the JWKS document and cache it.

        Raises:
            IdentityProviderUnavailableError: If JWKS cannot be fetched.
        """
        try:
            async with self._http_client_factory() as client:
                response = await client.get(self._jwks_url)
                response.raise_for_status()
                jwks = response.json()
        except httpx.HTTPError as e:
            self._probe.jwks_fetch_failed(error=str(e))
            raise IdentityProviderUnavailableError(
                f"Failed to fetch JWKS from identity provider: {e}"
            ) from e
        except ValueError as e:
            self._probe.jwks_fetch_failed(error=f"Invalid JWKS document: {e}")
            raise IdentityProviderUnavailableError(
                f"Identity provider returned an invalid JWKS document: {e}"
            ) from e

        if not isinstance(jwks, dict) or "keys" not in jwks:
            self._probe.jwks_fetch_failed(error="Missing keys in JWKS document")
            raise IdentityProviderUnavailableError(
                "Identity provider JWKS document has no keys"
            )

        self._jwks = jwks
        self._jwks_fetched_at = datetime.now(tz=timezone.utc)
        self._probe.jwks_fetched(key_count=len(jwks["keys"]))
        return jwks


def _extract_display_name(claims: dict[str, Any]) -> str | None:
    """Pick a display name from provider metadata or the standard name claim."""
    metadata = claims.get("user_metadata")
    if isinstance(metadata, dict):
        full_name = metadata.get("full_name") or metadata.get("name")
        if full_name:
            return str(full_name)
    name = claims.get("name")
    return str(name) if name else None
