"""Scheduling and completion of video dates."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import nulls_last
from sqlalchemy.orm import Session

from matchai.core.errors import NotFoundError, ValidationError
from matchai.models import VIDEO_CALL_STATUSES, Match, VideoCall
from matchai.services.matching import get_match_for_participant


def list_video_calls(db: Session, match_id: int) -> Sequence[VideoCall]:
    """Return a match's calls ordered by scheduled time, unscheduled ones last."""
    return (
        db.query(VideoCall)
        .filter(VideoCall.match_id == match_id)
        .order_by(nulls_last(VideoCall.scheduled_time.asc()), VideoCall.id.asc())
        .all()
    )


def schedule_video_call(db: Session, match: Match, scheduled_time: datetime | None) -> VideoCall:
    """Create a call in the ``scheduled`` state."""
    call = VideoCall(match_id=match.id, scheduled_time=scheduled_time, status="scheduled")
    db.add(call)
    db.commit()
    db.refresh(call)
    return call


def update_video_call(
    db: Session,
    *,
    caller_id: int,
    call_id: int,
    status: str,
    duration: int | None = None,
) -> VideoCall:
    """Change a call's status; ``duration`` is only written when supplied."""
    call = db.get(VideoCall, call_id)
    if call is None:
        raise NotFoundError("Video call not found")

    get_match_for_participant(db, call.match_id, caller_id)

    if status not in VIDEO_CALL_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'. Must be one of: {', '.join(VIDEO_CALL_STATUSES)}",
            errors=[{"loc": ["body", "status"], "msg": "invalid video call status"}],
        )
    if duration is not None and duration < 0:
        raise ValidationError("Duration must be a non-negative number of seconds")

    call.status = status
    if duration is not None:
        call.duration = duration
    db.commit()
    db.refresh(call)
    return call
