"""MatchAI dating backend: matching, realtime chat and AI suggestions."""

__version__ = "0.1.0"
