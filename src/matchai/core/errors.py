"""Exception hierarchy shared by services and API handlers.

Services raise these; ``matchai.main`` maps them to HTTP responses.
"""

from __future__ import annotations

from typing import Any


class MatchAIError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MatchAIError):
    """Malformed input or an unrecognized enum value."""

    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors


class AuthenticationError(MatchAIError):
    """No valid session credential was presented."""

    status_code = 401


class AuthorizationError(MatchAIError):
    """Caller is authenticated but is not the owner or a participant.

    Rendered as 401 rather than 403 to stay compatible with existing clients.
    """

    status_code = 401


class NotFoundError(MatchAIError):
    """A referenced resource id does not resolve."""

    status_code = 404


class ConflictError(MatchAIError):
    """The write would duplicate an existing unique record."""

    status_code = 409


class UpstreamUnavailableError(MatchAIError):
    """The LLM collaborator failed or timed out.

    Never rendered to a caller: the AI service substitutes a fallback payload.
    """

    status_code = 503
