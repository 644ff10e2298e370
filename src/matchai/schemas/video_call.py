"""Video call schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class VideoCallCreate(CamelModel):
    """Schedule a video call; status always starts as ``scheduled``."""

    scheduled_time: datetime | None = None


class VideoCallUpdate(CamelModel):
    """Status change, with the call length in seconds on completion."""

    status: str
    duration: int | None = Field(None, ge=0)


class VideoCallResponse(CamelModel):
    """Video call as returned by the API."""

    id: int
    match_id: int
    scheduled_time: datetime | None = None
    status: str
    duration: int | None = None
