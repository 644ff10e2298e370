"""Profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from matchai.api.dependencies import AIServiceDep, CurrentUserDep, RowIdPath, SessionDep
from matchai.models import User
from matchai.schemas.ai import ProfileInputs, ProfileSuggestion
from matchai.schemas.user import UserPublic, UserUpdate
from matchai.services import user_service

router = APIRouter(tags=["users"])


@router.get("/users/{user_id}", response_model=UserPublic)
async def get_user_profile(user_id: RowIdPath, current_user: CurrentUserDep, db: SessionDep) -> User:
    """Return another user's public profile."""
    return user_service.require_user(db, user_id)


@router.patch("/users/{user_id}", response_model=UserPublic)
async def update_user_profile(
    user_id: RowIdPath,
    payload: UserUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Update the caller's own profile."""
    return user_service.update_user(db, current_user.id, user_id, payload)


@router.post("/ai/generate-profile", response_model=ProfileSuggestion)
async def generate_profile(payload: ProfileInputs, ai: AIServiceDep) -> ProfileSuggestion:
    """Suggest a bio and refined interests during sign-up."""
    return await ai.generate_profile(payload)
