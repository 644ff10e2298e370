# src/matchai/models/message.py
"""Models describing chat messages exchanged inside a match."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from matchai.db.session import Base
from matchai.db.time import utcnow


class Message(Base):
    """Immutable chat line; ordering is by server timestamp ascending."""

    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_match_id_timestamp", "match_id", "timestamp"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(Integer, ForeignKey("matches.id"), nullable=False)
    sender_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
