"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and external collaborators
without specifying implementation details. This allows for dependency
inversion and keeps the application layer independent of infrastructure.
"""

from iam.ports.exceptions import UnauthorizedError
from iam.ports.identity import IdentityProvider, PreferenceCodec
from iam.ports.repositories import (
    IMembershipRepository,
    IPrincipalRepository,
    IRoleReferenceChecker,
    ITenantRepository,
)

__all__ = [
    "IMembershipRepository",
    "IPrincipalRepository",
    "IRoleReferenceChecker",
    "ITenantRepository",
    "IdentityProvider",
    "PreferenceCodec",
    "UnauthorizedError",
]
