"""Application services for IAM bounded context.

Application services orchestrate domain aggregates, repositories, and
other infrastructure to fulfill use cases. They are the "front door" to
the IAM context.
"""

from iam.application.services.membership_service import MembershipService
from iam.application.services.tenant_service import TenantService
from iam.application.services.tenant_switch_service import TenantSwitchService

__all__ = [
    "MembershipService",
    "TenantService",
    "TenantSwitchService",
]
