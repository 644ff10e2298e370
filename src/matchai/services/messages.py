"""Persisted chat messages for a match."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from matchai.core.errors import AuthorizationError, ValidationError
from matchai.models import Match, Message


def list_messages(db: Session, match_id: int) -> Sequence[Message]:
    """Return a match's messages, oldest first."""
    return (
        db.query(Message)
        .filter(Message.match_id == match_id)
        .order_by(Message.timestamp.asc(), Message.id.asc())
        .all()
    )


def create_message(db: Session, match: Match, sender_id: int, content: str) -> Message:
    """Persist a message from one of the match's participants."""
    if not match.has_participant(sender_id):
        raise AuthorizationError("Not authorized to send messages in this match")
    if not content or not content.strip():
        raise ValidationError("Message content must not be empty")

    message = Message(match_id=match.id, sender_id=sender_id, content=content)
    db.add(message)
    db.commit()
    db.refresh(message)
    return message
