"""Frames exchanged over the realtime WebSocket channel."""

from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter, field_validator

from .common import CamelModel, RowId


class AuthFrame(CamelModel):
    """Bind the channel to a user identity."""

    type: Literal["auth"]
    user_id: RowId
    # Session token; only checked when realtime_require_token is enabled.
    token: str | None = None


class ChatFrame(CamelModel):
    """Chat line to persist and push to the other participant."""

    type: Literal["message"]
    match_id: RowId
    content: str = Field(..., min_length=1, max_length=5000)
    sender_id: int | None = None


class VideoSignalFrame(CamelModel):
    """Opaque WebRTC signalling payload for another user."""

    type: Literal["video_signal"]
    target_user_id: RowId
    signal: Any
    from_user_id: int | None = None

    @field_validator("signal")
    @classmethod
    def _require_signal(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("signal is required")
        return value


InboundFrame = Annotated[
    AuthFrame | ChatFrame | VideoSignalFrame,
    Field(discriminator="type"),
]

inbound_frame_adapter: TypeAdapter[AuthFrame | ChatFrame | VideoSignalFrame] = TypeAdapter(
    InboundFrame
)
