"""Signed active-tenant preference.

The preference cookie stores which tenant a principal last selected. Its
value is a compact HS256 JWT bound to the principal, so a cookie copied
from another principal's browser or edited by hand is rejected. Even a
valid preference is only a hint: the resolver always checks it against
the principal's current memberships.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from iam.domain.value_objects import TenantId
from iam.ports.exceptions import InvalidPreferenceError
from iam.ports.identity import PreferenceCodec

ALGORITHM = "HS256"


class ActiveTenantPreferenceCodec(PreferenceCodec):
    """Encodes and verifies the active-tenant preference token.

    Claims:
        sub: principal the preference was issued to
        tid: preferred tenant id
        iat: issue time
        exp: expiry, ``max_age`` after issue
    """

    def __init__(
        self,
        secret: str,
        max_age: timedelta = timedelta(days=30),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("Preference signing secret must not be empty")
        self._secret = secret
        self._max_age = max_age
        self._clock = clock or (lambda: datetime.now(UTC))

    def encode(self, principal_id: str, tenant_id: str) -> str:
        """Produce a signed preference value bound to the principal."""
        issued_at = self._clock()
        claims = {
            "sub": principal_id,
            "tid": tenant_id,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._max_age).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def decode(self, raw: str, principal_id: str) -> str:
        """Verify a preference value and return the preferred tenant id.

        Raises:
            InvalidPreferenceError: If the value is malformed, tampered
                with, expired or issued to another principal
        """
        try:
            claims = jwt.decode(
                raw,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_aud": False},
            )
        except ExpiredSignatureError as e:
            raise InvalidPreferenceError("expired") from e
        except JWTError as e:
            raise InvalidPreferenceError("invalid_signature") from e

        if claims.get("sub") != principal_id:
            raise InvalidPreferenceError("principal_mismatch")

        tenant_id = claims.get("tid")
        try:
            return TenantId.from_string(tenant_id).value
        except ValueError as e:
            raise InvalidPreferenceError("malformed_tenant_id") from e
