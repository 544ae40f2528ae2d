"""Authentication shared kernel module."""

from shared_kernel.auth.jwt_validator import (
    IdentityProviderUnavailableError,
    InvalidTokenError,
    JWTValidator,
    TokenClaims,
)
from shared_kernel.auth.observability import (
    DefaultJWTValidatorProbe,
    JWTValidatorProbe,
)

__all__ = [
    "IdentityProviderUnavailableError",
    "InvalidTokenError",
    "JWTValidator",
    "JWTValidatorProbe",
    "DefaultJWTValidatorProbe",
    "TokenClaims",
]
