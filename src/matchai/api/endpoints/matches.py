# src/matchai/api/endpoints/matches.py
"""Match discovery and lifecycle endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from matchai.api.dependencies import AIServiceDep, CurrentUserDep, RowIdPath, SessionDep
from matchai.models import Match, User
from matchai.schemas.match import (
    MatchCreate,
    MatchCreatedResponse,
    MatchResponse,
    MatchStatusUpdate,
    MatchWithUserResponse,
)
from matchai.schemas.user import UserPublic
from matchai.services import matching

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("/potential", response_model=list[UserPublic])
async def list_potential_matches(current_user: CurrentUserDep, db: SessionDep) -> list[User]:
    """Discovery feed: users with no match record of any status with the caller."""
    return matching.list_potential_matches(db, current_user.id)


@router.get("", response_model=list[MatchWithUserResponse])
async def list_matches(current_user: CurrentUserDep, db: SessionDep) -> list[MatchWithUserResponse]:
    """All of the caller's matches, each with the other user's profile."""
    return matching.list_matches_for_user(db, current_user.id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MatchCreatedResponse)
async def create_match(
    payload: MatchCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    ai: AIServiceDep,
) -> MatchCreatedResponse:
    """Record interest in another user and score the pairing."""
    match, reasons = await matching.create_match(
        db,
        ai,
        caller_id=current_user.id,
        user_id_1=payload.user_id_1,
        user_id_2=payload.user_id_2,
        status=payload.status,
    )
    response = MatchCreatedResponse.model_validate(match)
    response.compatibility_reasons = reasons
    return response


@router.patch("/{match_id}", response_model=MatchResponse)
async def update_match_status(
    match_id: RowIdPath,
    payload: MatchStatusUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Match:
    """Overwrite the status of a match the caller takes part in."""
    return matching.transition_match(
        db, caller_id=current_user.id, match_id=match_id, status=payload.status
    )
