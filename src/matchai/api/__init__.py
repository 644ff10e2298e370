# src/matchai/api/__init__.py
"""REST and realtime API routers."""

from .endpoints import (
    auth_router,
    matches_router,
    messages_router,
    realtime_router,
    suggestions_router,
    users_router,
    video_calls_router,
)

__all__ = [
    "auth_router",
    "matches_router",
    "messages_router",
    "realtime_router",
    "suggestions_router",
    "users_router",
    "video_calls_router",
]
