"""Match lifecycle: creation with AI scoring, status changes and discovery.

Statuses are ``pending``, ``matched`` and ``rejected``. Under the default
``permissive`` policy any participant may set any status at any time; the
``reciprocal`` policy only lets the invited side (``user_id_2``) confirm a
match.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import or_, select

from matchai.core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from matchai.core.settings import settings
from matchai.models import MATCH_STATUSES, Match, User
from matchai.schemas.match import MatchWithUserResponse
from matchai.schemas.user import UserPublic

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from matchai.services.ai import MatchmakingAI

logger = logging.getLogger(__name__)


def _validate_status(status: str) -> None:
    if status not in MATCH_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'. Must be one of: {', '.join(MATCH_STATUSES)}",
            errors=[{"loc": ["body", "status"], "msg": "invalid match status"}],
        )


def find_pair(db: Session, user_a: int, user_b: int) -> Match | None:
    """Return any match between the two users, in either direction."""
    return (
        db.query(Match)
        .filter(
            ((Match.user_id_1 == user_a) & (Match.user_id_2 == user_b))
            | ((Match.user_id_1 == user_b) & (Match.user_id_2 == user_a))
        )
        .first()
    )


def get_match(db: Session, match_id: int) -> Match:
    """Return a match by id or raise NotFoundError."""
    match = db.get(Match, match_id)
    if match is None:
        raise NotFoundError("Match not found")
    return match


def get_match_for_participant(db: Session, match_id: int, user_id: int) -> Match:
    """Return a match the caller takes part in.

    Raises:
        NotFoundError: If the match does not exist.
        AuthorizationError: If ``user_id`` is not one of its two users.
    """
    match = get_match(db, match_id)
    if not match.has_participant(user_id):
        raise AuthorizationError("Not authorized to access this match")
    return match


async def create_match(
    db: Session,
    ai: MatchmakingAI,
    *,
    caller_id: int,
    user_id_1: int,
    user_id_2: int,
    status: str,
) -> tuple[Match, list[str]]:
    """Create a match and attach an AI compatibility score.

    The row is committed before scoring, so a crash in between leaves a
    match whose score is still null. Scoring never fails the operation:
    the AI service substitutes its fallback verdict.

    Returns:
        ``(match, reasons)``; the reasons are not persisted.
    """
    _validate_status(status)
    if caller_id not in (user_id_1, user_id_2):
        raise ValidationError("Caller must be one of the two matched users")
    if user_id_1 == user_id_2:
        raise ValidationError("Cannot match with yourself")

    user1 = db.get(User, user_id_1)
    user2 = db.get(User, user_id_2)
    if user1 is None or user2 is None:
        raise NotFoundError("One or both users not found")

    if settings.enforce_unique_match_pairs and find_pair(db, user_id_1, user_id_2) is not None:
        raise ConflictError("A match between these users already exists")

    match = Match(user_id_1=user_id_1, user_id_2=user_id_2, status=status)
    db.add(match)
    db.commit()
    db.refresh(match)

    compatibility = await ai.score_compatibility(user1, user2)
    match.compatibility_score = compatibility.score
    db.commit()
    db.refresh(match)

    logger.info(
        "Match %s created between %s and %s (status=%s, score=%s)",
        match.id, user_id_1, user_id_2, status, match.compatibility_score,
    )
    return match, list(compatibility.reasons)


def transition_match(db: Session, *, caller_id: int, match_id: int, status: str) -> Match:
    """Overwrite a match's status on behalf of one of its participants.

    Check order: existence, participation, then status value. Setting the
    current status again is a no-op.
    """
    match = get_match_for_participant(db, match_id, caller_id)
    _validate_status(status)

    if (
        settings.match_status_policy == "reciprocal"
        and status == "matched"
        and match.status != "matched"
        and caller_id != match.user_id_2
    ):
        raise AuthorizationError("Only the invited user can confirm this match")

    if match.status != status:
        logger.info("Match %s: %s -> %s by user %s", match.id, match.status, status, caller_id)
        match.status = status
        db.commit()
        db.refresh(match)
    return match


def list_matches_for_user(db: Session, user_id: int) -> list[MatchWithUserResponse]:
    """Return every match the user takes part in, with the other side's public profile."""
    matches = (
        db.query(Match)
        .filter(or_(Match.user_id_1 == user_id, Match.user_id_2 == user_id))
        .order_by(Match.id.asc())
        .all()
    )

    results: list[MatchWithUserResponse] = []
    for match in matches:
        other = db.get(User, match.other_participant(user_id))
        entry = MatchWithUserResponse.model_validate(match)
        entry.other_user = UserPublic.model_validate(other) if other is not None else None
        results.append(entry)
    return results


def list_potential_matches(db: Session, user_id: int) -> list[User]:
    """Return discoverable users: everyone except the caller and anyone already paired with them.

    A match in any status hides the pair from each other's feed.
    """
    if db.get(User, user_id) is None:
        return []

    as_initiator = select(Match.user_id_2).where(Match.user_id_1 == user_id)
    as_target = select(Match.user_id_1).where(Match.user_id_2 == user_id)

    return (
        db.query(User)
        .filter(
            User.id != user_id,
            User.id.not_in(as_initiator),
            User.id.not_in(as_target),
        )
        .order_by(User.id.asc())
        .all()
    )
