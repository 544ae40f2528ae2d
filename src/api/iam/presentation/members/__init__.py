"""Membership management routes."""

from iam.presentation.members.routes import router

__all__ = ["router"]
