"""Role routes."""

from organization.presentation.roles.routes import router

__all__ = ["router"]
