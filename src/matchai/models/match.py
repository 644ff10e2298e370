# src/matchai/models/match.py
"""Models describing pairings between two users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from matchai.db.session import Base
from matchai.db.time import utcnow

MATCH_STATUSES: tuple[str, ...] = ("pending", "matched", "rejected")


class Match(Base):
    """Directed pairing from an initiator (``user_id_1``) to a target (``user_id_2``).

    No uniqueness constraint covers the pair; duplicate detection is an
    optional service-level policy.
    """

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'matched', 'rejected')",
            name="ck_matches_status",
        ),
        CheckConstraint(
            "compatibility_score IS NULL OR compatibility_score BETWEEN 0 AND 100",
            name="ck_matches_compatibility_score",
        ),
        Index("ix_matches_user_id_1", "user_id_1"),
        Index("ix_matches_user_id_2", "user_id_2"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id_1: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    user_id_2: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    # Null until scoring has completed.
    compatibility_score: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def has_participant(self, user_id: int) -> bool:
        """Return True if ``user_id`` is one of the two sides of the match."""
        return user_id in (self.user_id_1, self.user_id_2)

    def other_participant(self, user_id: int) -> int:
        """Return the id of the side that is not ``user_id``."""
        return self.user_id_2 if self.user_id_1 == user_id else self.user_id_1
