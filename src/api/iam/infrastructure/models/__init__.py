"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.membership import MembershipModel
from iam.infrastructure.models.principal import PrincipalModel
from iam.infrastructure.models.tenant import TenantModel

__all__ = [
    "MembershipModel",
    "PrincipalModel",
    "TenantModel",
]
