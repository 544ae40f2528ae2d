"""Shift template routes."""

from organization.presentation.shift_templates.routes import router

__all__ = ["router"]
