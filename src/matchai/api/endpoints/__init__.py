# src/matchai/api/endpoints/__init__.py
"""API endpoint modules."""

from .auth import router as auth_router
from .matches import router as matches_router
from .messages import router as messages_router
from .realtime import router as realtime_router
from .suggestions import router as suggestions_router
from .users import router as users_router
from .video_calls import router as video_calls_router

__all__ = [
    "auth_router",
    "matches_router",
    "messages_router",
    "realtime_router",
    "suggestions_router",
    "users_router",
    "video_calls_router",
]
