# src/matchai/api/endpoints/auth.py
"""Authentication endpoints for the MatchAI API."""

from __future__ import annotations

from fastapi import APIRouter, status

from matchai.api.dependencies import CurrentUserDep, SessionDep
from matchai.core.security import create_access_token
from matchai.models import User
from matchai.schemas.user import AuthenticatedUser, UserCreate, UserLogin, UserPublic
from matchai.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


def _with_token(user: User) -> AuthenticatedUser:
    public = UserPublic.model_validate(user)
    return AuthenticatedUser(**public.model_dump(), access_token=create_access_token(user.id))


@router.post(
    "/register",
    summary="Create an account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthenticatedUser,
)
async def register_user(payload: UserCreate, db: SessionDep) -> AuthenticatedUser:
    """Register a new user and sign them in."""
    user = user_service.create_user(db, payload)
    return _with_token(user)


@router.post("/login", summary="Sign in with username and password", response_model=AuthenticatedUser)
async def login_user(payload: UserLogin, db: SessionDep) -> AuthenticatedUser:
    """Exchange credentials for a session token."""
    user = user_service.authenticate(db, payload.username, payload.password)
    return _with_token(user)


@router.get("/logout")
async def logout_user() -> dict[str, str]:
    """Tokens are stateless; the client discards its copy."""
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserPublic)
async def get_me(current_user: CurrentUserDep) -> User:
    """Return the caller's own public profile."""
    return current_user
