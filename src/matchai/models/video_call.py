# src/matchai/models/video_call.py
"""Models for scheduled video dates."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from matchai.db.session import Base

VIDEO_CALL_STATUSES: tuple[str, ...] = ("scheduled", "completed", "cancelled")


class VideoCall(Base):
    """Video call attached to a match."""

    __tablename__ = "video_calls"
    __table_args__ = (
        CheckConstraint(
            "status IN ('scheduled', 'completed', 'cancelled')",
            name="ck_video_calls_status",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(Integer, ForeignKey("matches.id"), nullable=False)
    scheduled_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="scheduled")
    # Seconds; set when the call completes.
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
