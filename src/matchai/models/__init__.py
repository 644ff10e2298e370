# src/matchai/models/__init__.py
"""SQLAlchemy models for the MatchAI application."""

from .match import MATCH_STATUSES, Match
from .message import Message
from .user import User
from .video_call import VIDEO_CALL_STATUSES, VideoCall

__all__ = [
    "Match", "MATCH_STATUSES",
    "Message",
    "User",
    "VideoCall", "VIDEO_CALL_STATUSES",
]
