"""
FastAPI dependencies.

Settings and chaos state are owned by the application instance and looked
up from app.state, so each app built by create_app() is isolated.
"""

from fastapi import Request

from bluegreen_service.chaos import ChaosState
from bluegreen_service.config import Settings


def get_settings_dep(request: Request) -> Settings:
    """Dependency for routes to get the app's settings."""
    return request.app.state.settings


def get_chaos_state(request: Request) -> ChaosState:
    """Dependency for routes to get the app's chaos state."""
    return request.app.state.chaos
