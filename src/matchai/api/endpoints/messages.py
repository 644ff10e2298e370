# src/matchai/api/endpoints/messages.py
"""Persisted chat endpoints, independent of the realtime channel."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, status

from matchai.api.dependencies import CurrentUserDep, RowIdPath, SessionDep
from matchai.models import Message
from matchai.schemas.message import MessageCreate, MessageResponse
from matchai.services import matching
from matchai.services import messages as message_service

router = APIRouter(prefix="/matches/{match_id}/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def get_messages(match_id: RowIdPath, current_user: CurrentUserDep, db: SessionDep) -> Sequence[Message]:
    """Return the match's conversation, oldest first."""
    matching.get_match_for_participant(db, match_id, current_user.id)
    return message_service.list_messages(db, match_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def send_message(
    match_id: RowIdPath,
    payload: MessageCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Message:
    """Store a message from the caller; realtime delivery is not attempted here."""
    match = matching.get_match_for_participant(db, match_id, current_user.id)
    return message_service.create_message(db, match, current_user.id, payload.content)
