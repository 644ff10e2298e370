"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .ai import (
    Compatibility,
    ConversationStarters,
    OptimalTime,
    OptimalTimes,
    ProfileInputs,
    ProfileSuggestion,
    VideoDateTips,
)
from .match import (
    MatchCreate,
    MatchCreatedResponse,
    MatchResponse,
    MatchStatusUpdate,
    MatchWithUserResponse,
)
from .message import MessageCreate, MessageResponse
from .realtime import AuthFrame, ChatFrame, VideoSignalFrame, inbound_frame_adapter
from .user import AuthenticatedUser, UserCreate, UserLogin, UserPublic, UserUpdate
from .video_call import VideoCallCreate, VideoCallResponse, VideoCallUpdate

__all__ = [
    "Compatibility", "ConversationStarters", "OptimalTime", "OptimalTimes",
    "ProfileInputs", "ProfileSuggestion", "VideoDateTips",
    "MatchCreate", "MatchCreatedResponse", "MatchResponse", "MatchStatusUpdate",
    "MatchWithUserResponse",
    "MessageCreate", "MessageResponse",
    "AuthFrame", "ChatFrame", "VideoSignalFrame", "inbound_frame_adapter",
    "AuthenticatedUser", "UserCreate", "UserLogin", "UserPublic", "UserUpdate",
    "VideoCallCreate", "VideoCallResponse", "VideoCallUpdate",
]
