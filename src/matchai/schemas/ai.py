"""Payloads produced by (or sent to) the LLM collaborator."""

import math
from typing import Any

from pydantic import Field, field_validator

from .common import CamelModel


class ProfileInputs(CamelModel):
    """Raw facts a user enters before asking for a generated bio."""

    interests: list[str] = Field(default_factory=list)
    age: int | None = None
    gender: str | None = None
    location: str | None = None
    occupation: str | None = None
    education: str | None = None
    looking_for: str | None = None


class ProfileSuggestion(CamelModel):
    bio: str
    interests: list[str] = Field(default_factory=list)


class ConversationStarters(CamelModel):
    starters: list[str]


class VideoDateTips(CamelModel):
    tips: list[str]


class OptimalTime(CamelModel):
    day: str
    time: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class OptimalTimes(CamelModel):
    times: list[OptimalTime]


class Compatibility(CamelModel):
    """Compatibility verdict on a 0-100 scale."""

    score: int = Field(..., ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return value
        # inf/nan are left for the int check to reject.
        if not math.isfinite(value):
            return value
        return max(0, min(100, round(value)))
