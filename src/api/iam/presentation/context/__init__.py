"""Tenant context routes."""

from iam.presentation.context.routes import router

__all__ = ["router"]
