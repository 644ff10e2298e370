"""Match-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel, RowId
from .user import UserPublic


class MatchCreate(CamelModel):
    """Request to create a match between two users."""

    user_id_1: RowId = Field(..., description="Initiating user")
    user_id_2: RowId = Field(..., description="Target user")
    status: str = Field(..., description="One of: pending, matched, rejected")


class MatchStatusUpdate(CamelModel):
    """Request to overwrite a match's status."""

    status: str


class MatchResponse(CamelModel):
    """Match record as returned by the API."""

    id: int
    user_id_1: int
    user_id_2: int
    status: str
    timestamp: datetime
    compatibility_score: int | None = None


class MatchCreatedResponse(MatchResponse):
    """Newly created match; the reasons are computed once and not stored."""

    compatibility_reasons: list[str] = Field(default_factory=list)


class MatchWithUserResponse(MatchResponse):
    """A match enriched with the other participant's public profile."""

    other_user: UserPublic | None = None
