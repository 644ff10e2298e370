"""Video call scheduling endpoints."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, status

from matchai.api.dependencies import CurrentUserDep, RowIdPath, SessionDep
from matchai.models import VideoCall
from matchai.schemas.video_call import VideoCallCreate, VideoCallResponse, VideoCallUpdate
from matchai.services import matching, video_calls

router = APIRouter(tags=["video-calls"])


@router.get("/matches/{match_id}/video-calls", response_model=list[VideoCallResponse])
async def list_video_calls(match_id: RowIdPath, current_user: CurrentUserDep, db: SessionDep) -> Sequence[VideoCall]:
    """List the match's calls by scheduled time."""
    matching.get_match_for_participant(db, match_id, current_user.id)
    return video_calls.list_video_calls(db, match_id)


@router.post(
    "/matches/{match_id}/video-calls",
    status_code=status.HTTP_201_CREATED,
    response_model=VideoCallResponse,
)
async def schedule_video_call(
    match_id: RowIdPath,
    payload: VideoCallCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VideoCall:
    """Schedule a call; it always starts in the ``scheduled`` state."""
    match = matching.get_match_for_participant(db, match_id, current_user.id)
    return video_calls.schedule_video_call(db, match, payload.scheduled_time)


@router.patch("/video-calls/{call_id}", response_model=VideoCallResponse)
async def update_video_call(
    call_id: RowIdPath,
    payload: VideoCallUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VideoCall:
    """Complete or cancel a call (or put it back to scheduled)."""
    return video_calls.update_video_call(
        db,
        caller_id=current_user.id,
        call_id=call_id,
        status=payload.status,
        duration=payload.duration,
    )
