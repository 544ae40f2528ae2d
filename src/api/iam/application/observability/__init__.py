"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.membership_service_probe import (
    DefaultMembershipServiceProbe,
    MembershipServiceProbe,
)
from iam.application.observability.tenant_service_probe import (
    DefaultTenantServiceProbe,
    TenantServiceProbe,
)

__all__ = [
    "DefaultMembershipServiceProbe",
    "DefaultTenantServiceProbe",
    "MembershipServiceProbe",
    "TenantServiceProbe",
]
