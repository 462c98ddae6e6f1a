"""Dependency injection for API routes."""

from .middleware.auth import CurrentUser, get_current_user
from ..services.run_generation import RunGenerationService, get_run_generation_service

__all__ = [
    "CurrentUser",
    "RunGenerationService",
    "get_current_user",
    "get_run_generation_service",
]
