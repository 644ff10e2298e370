"""AI-generated suggestions for a match."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy.orm import Session

from matchai.api.dependencies import AIServiceDep, CurrentUserDep, RowIdPath, SessionDep
from matchai.core.errors import NotFoundError
from matchai.models import User
from matchai.schemas.ai import ConversationStarters, OptimalTimes, VideoDateTips
from matchai.services import matching, user_service

router = APIRouter(tags=["suggestions"])


def _other_participant(db: Session, match_id: int, caller: User) -> User:
    match = matching.get_match_for_participant(db, match_id, caller.id)
    other = user_service.get_user(db, match.other_participant(caller.id))
    if other is None:
        raise NotFoundError("One or both users not found")
    return other


@router.get("/matches/{match_id}/conversation-starters", response_model=ConversationStarters)
async def get_conversation_starters(
    match_id: RowIdPath,
    current_user: CurrentUserDep,
    db: SessionDep,
    ai: AIServiceDep,
) -> ConversationStarters:
    """Openers tailored to both users' interests."""
    other = _other_participant(db, match_id, current_user)
    return await ai.generate_conversation_starters(
        current_user.interests, other.interests, other.profile_name
    )


@router.get("/matches/{match_id}/video-date-tips", response_model=VideoDateTips)
async def get_video_date_tips(
    match_id: RowIdPath,
    current_user: CurrentUserDep,
    db: SessionDep,
    ai: AIServiceDep,
) -> VideoDateTips:
    """Tips for a video date between the two participants."""
    other = _other_participant(db, match_id, current_user)
    return await ai.generate_video_date_tips(current_user, other)


@router.get("/optimal-times", response_model=OptimalTimes)
async def get_optimal_times(current_user: CurrentUserDep, ai: AIServiceDep) -> OptimalTimes:
    """Suggested days and times for a video date."""
    return await ai.suggest_optimal_times()
