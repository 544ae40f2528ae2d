"""Shift routes."""

from organization.presentation.shifts.routes import router

__all__ = ["router"]
