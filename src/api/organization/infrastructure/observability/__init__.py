"""Observability probes for organization infrastructure."""

from organization.infrastructure.observability.repository_probe import (
    DefaultOrganizationRepositoryProbe,
    OrganizationRepositoryProbe,
)

__all__ = ["DefaultOrganizationRepositoryProbe", "OrganizationRepositoryProbe"]
