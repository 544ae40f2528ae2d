"""Location routes."""

from organization.presentation.locations.routes import router

__all__ = ["router"]
