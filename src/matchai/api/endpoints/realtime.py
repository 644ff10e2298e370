"""WebSocket endpoint for chat push and video-call signalling."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket

from matchai.api.dependencies import RelayDep, SessionDep
from matchai.services.relay import RelayConnection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


def _frame_text(message: dict) -> str | None:
    """Return a frame's payload as text; binary frames are decoded as UTF-8."""
    text = message.get("text")
    if text is not None:
        return text
    data = message.get("bytes")
    if data is None:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


@router.websocket("/ws")
async def realtime_channel(websocket: WebSocket, relay: RelayDep, db: SessionDep) -> None:
    """Accept a channel and feed each frame to the relay until it closes."""
    await websocket.accept()
    connection = RelayConnection(channel=websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.debug("Realtime channel for user %s closed by client", connection.user_id)
                break

            raw = _frame_text(message)
            if raw is None:
                logger.warning("Dropping undecodable realtime frame from user %s", connection.user_id)
                continue
            await relay.handle_text(connection, raw, db)
    finally:
        relay.disconnect(connection)
