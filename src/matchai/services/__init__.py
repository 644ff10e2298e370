"""Business logic services for the MatchAI application."""

from .ai import MatchmakingAI, OpenAIMatchmakingAI, get_ai_service
from .connection_registry import ConnectionRegistry
from .relay import RealtimeRelay, RelayConnection

__all__ = [
    "ConnectionRegistry",
    "MatchmakingAI",
    "OpenAIMatchmakingAI",
    "RealtimeRelay",
    "RelayConnection",
    "get_ai_service",
]
