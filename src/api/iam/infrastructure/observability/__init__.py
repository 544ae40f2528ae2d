"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from iam.infrastructure.observability.repository_probe import (
    DefaultMembershipRepositoryProbe,
    DefaultPrincipalRepositoryProbe,
    DefaultTenantRepositoryProbe,
    MembershipRepositoryProbe,
    PrincipalRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "DefaultMembershipRepositoryProbe",
    "DefaultPrincipalRepositoryProbe",
    "DefaultTenantRepositoryProbe",
    "MembershipRepositoryProbe",
    "PrincipalRepositoryProbe",
    "TenantRepositoryProbe",
]
