"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, Path, WebSocket
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from matchai.core.errors import AuthenticationError
from matchai.core.security import decode_access_token
from matchai.db.session import get_db
from matchai.models import User
from matchai.schemas.common import MAX_ROW_ID
from matchai.services.ai import MatchmakingAI, get_ai_service
from matchai.services.relay import RealtimeRelay

# HTTP Bearer scheme; missing credentials are reported by get_current_user.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

# Resource ids in URL paths, bounded to the INTEGER column range.
RowIdPath = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Resolve the bearer session token to the calling user.

    Raises:
        AuthenticationError: If no token is sent, it is invalid or expired,
            or its user no longer exists.
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    user_id = decode_access_token(credentials.credentials)
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def get_ai_service_dep() -> MatchmakingAI:
    """Return the shared LLM collaborator."""
    return get_ai_service()


def get_relay(websocket: WebSocket) -> RealtimeRelay:
    """Return the relay created at application startup."""
    relay: RealtimeRelay = websocket.app.state.relay
    return relay


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
AIServiceDep = Annotated[MatchmakingAI, Depends(get_ai_service_dep)]
RelayDep = Annotated[RealtimeRelay, Depends(get_relay)]
