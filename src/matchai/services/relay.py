"""Realtime relay for chat lines and video-call signalling.

Inbound frames are JSON objects with a ``type`` of ``auth``, ``message``
or ``video_signal``. Nothing is ever sent back as a protocol error:
malformed or unauthorised frames are logged and dropped and the channel
stays open.

``auth`` trusts the claimed ``userId`` unless ``require_token`` is set, in
which case the frame must also carry the REST session token for that user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from matchai.core.errors import MatchAIError
from matchai.core.security import decode_access_token
from matchai.models import Match, User
from matchai.schemas.message import MessageResponse
from matchai.schemas.realtime import AuthFrame, ChatFrame, VideoSignalFrame, inbound_frame_adapter
from matchai.services import messages as message_service
from matchai.services.connection_registry import Channel, ConnectionRegistry

logger = logging.getLogger(__name__)


@dataclass
class RelayConnection:
    """One open channel and the identity bound to it (None until ``auth``)."""

    channel: Channel
    user_id: int | None = None


class RealtimeRelay:
    """Routes frames between registered channels and persists chat messages."""

    def __init__(self, registry: ConnectionRegistry, *, require_token: bool = False) -> None:
        self.registry = registry
        self.require_token = require_token

    async def handle_text(self, connection: RelayConnection, raw: str, db: Session) -> None:
        """Parse and dispatch one inbound text frame."""
        try:
            frame = inbound_frame_adapter.validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning("Dropping malformed realtime frame: %s", exc.errors(include_url=False))
            return

        try:
            if isinstance(frame, AuthFrame):
                await self.on_auth(connection, frame, db)
            elif isinstance(frame, ChatFrame):
                await self.on_message(connection, frame, db)
            elif isinstance(frame, VideoSignalFrame):
                await self.on_video_signal(connection, frame)
        except Exception:
            # A failed frame is dropped; the channel stays open.
            db.rollback()
            logger.exception("Realtime %s frame failed; dropped", frame.type)

    async def on_auth(self, connection: RelayConnection, frame: AuthFrame, db: Session) -> None:
        """Bind the channel to the claimed identity."""
        if self.require_token:
            if frame.token is None:
                logger.warning("Auth frame for user %s dropped: token required", frame.user_id)
                return
            try:
                token_user_id = decode_access_token(frame.token)
            except MatchAIError:
                logger.warning("Auth frame for user %s dropped: invalid token", frame.user_id)
                return
            if token_user_id != frame.user_id or db.get(User, token_user_id) is None:
                logger.warning("Auth frame for user %s dropped: token mismatch", frame.user_id)
                return

        if connection.user_id is not None and connection.user_id != frame.user_id:
            self.registry.unregister(connection.user_id, connection.channel)

        connection.user_id = frame.user_id
        await self.registry.register(frame.user_id, connection.channel)

    async def on_message(self, connection: RelayConnection, frame: ChatFrame, db: Session) -> None:
        """Persist a chat line, push it to the other participant and confirm to the sender."""
        sender_id = connection.user_id
        if sender_id is None:
            logger.warning("Chat frame on unauthenticated channel dropped")
            return
        if frame.sender_id is not None and frame.sender_id != sender_id:
            logger.info(
                "Chat frame claims sender %s on channel bound to %s; using bound identity",
                frame.sender_id, sender_id,
            )

        match = db.get(Match, frame.match_id)
        if match is None:
            logger.warning("Chat frame for unknown match %s dropped", frame.match_id)
            return
        if not match.has_participant(sender_id):
            logger.warning(
                "User %s is not a participant of match %s; chat frame dropped",
                sender_id, frame.match_id,
            )
            return

        message = message_service.create_message(db, match, sender_id, frame.content)
        payload = MessageResponse.model_validate(message).model_dump(mode="json", by_alias=True)

        recipient_id = match.other_participant(sender_id)
        delivered = await self.registry.send_to(
            recipient_id, {"type": "new_message", "message": payload}
        )
        if not delivered:
            logger.info(
                "Message %s stored; recipient %s not connected", message.id, recipient_id
            )

        await self._send(connection, {"type": "message_sent", "message": payload})

    async def on_video_signal(self, connection: RelayConnection, frame: VideoSignalFrame) -> None:
        """Forward an opaque signal to the target user, if connected."""
        if connection.user_id is None:
            logger.warning("Video signal on unauthenticated channel dropped")
            return

        delivered = await self.registry.send_to(
            frame.target_user_id,
            {"type": "video_signal", "fromUserId": connection.user_id, "signal": frame.signal},
        )
        if not delivered:
            logger.debug(
                "Video signal from %s to %s dropped: target not connected",
                connection.user_id, frame.target_user_id,
            )

    def disconnect(self, connection: RelayConnection) -> None:
        """Release the registry entry for a closed channel."""
        if connection.user_id is not None:
            self.registry.unregister(connection.user_id, connection.channel)

    async def _send(self, connection: RelayConnection, payload: dict[str, Any]) -> None:
        try:
            await connection.channel.send_json(payload)
        except Exception as exc:
            logger.warning("Confirmation to user %s failed: %s", connection.user_id, exc)
