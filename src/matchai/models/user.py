# src/matchai/models/user.py
"""SQLAlchemy model for user accounts and dating profiles."""

from __future__ import annotations

from sqlalchemy import JSON, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from matchai.db.session import Base


class User(Base):
    """Account identity plus the public dating profile."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    profile_name: Mapped[str] = mapped_column(Text, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    occupation: Mapped[str | None] = mapped_column(Text, nullable=True)
    education: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Desired relationship type.
    looking_for: Mapped[str] = mapped_column(Text, nullable=False)
    interests: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    profile_video_url: Mapped[str | None] = mapped_column(Text, nullable=True)

