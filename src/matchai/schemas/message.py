"""Chat message schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class MessageCreate(CamelModel):
    """Schema for posting a chat message over REST."""

    content: str = Field(..., min_length=1, max_length=5000)


class MessageResponse(CamelModel):
    """Persisted chat message."""

    id: int
    match_id: int
    sender_id: int
    content: str
    timestamp: datetime
