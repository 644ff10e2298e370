"""In-process registry of live realtime channels, keyed by user id.

One registry is created when the application starts and cleared when it
shuts down. State is never persisted: after a restart every client must
reconnect and send a fresh ``auth`` frame.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class Channel(Protocol):
    """The subset of a WebSocket the relay depends on."""

    async def send_json(self, data: Any) -> None: ...

    async def close(self, code: int = 1000) -> None: ...


def is_open(channel: Channel) -> bool:
    """Return True unless the channel reports a non-connected state."""
    for attr in ("client_state", "application_state"):
        state = getattr(channel, attr, WebSocketState.CONNECTED)
        if state != WebSocketState.CONNECTED:
            return False
    return True


class ConnectionRegistry:
    """Maps a user id to its single active channel.

    Mutations happen on the event loop one frame at a time, so no lock is
    taken. A user has at most one registered channel; registering again
    supersedes (and closes) the previous one.
    """

    def __init__(self) -> None:
        self._channels: dict[int, Channel] = {}

    def __len__(self) -> int:
        return len(self._channels)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._channels

    async def register(self, user_id: int, channel: Channel) -> Channel | None:
        """Bind ``channel`` to ``user_id`` and return the superseded channel, if any."""
        previous = self._channels.get(user_id)
        self._channels[user_id] = channel
        logger.info("Realtime channel bound for user %s", user_id)

        if previous is None or previous is channel:
            return None

        logger.info("Closing superseded channel for user %s", user_id)
        try:
            await previous.close(code=1000)
        except Exception as exc:  # stale socket may already be gone
            logger.debug("Superseded channel for user %s failed to close: %s", user_id, exc)
        return previous

    def lookup(self, user_id: int) -> Channel | None:
        """Return the user's channel, or None if the user is not connected."""
        return self._channels.get(user_id)

    def unregister(self, user_id: int, channel: Channel | None = None) -> bool:
        """Remove the entry for ``user_id``.

        When ``channel`` is given the entry is only removed if it still points
        at that channel, so a superseded socket closing late cannot evict its
        replacement.
        """
        current = self._channels.get(user_id)
        if current is None:
            return False
        if channel is not None and current is not channel:
            return False
        del self._channels[user_id]
        logger.info("Realtime channel released for user %s", user_id)
        return True

    async def send_to(self, user_id: int, payload: dict[str, Any]) -> bool:
        """Push ``payload`` to the user's channel.

        Returns False when the user is absent, the channel is not open, or the
        send fails; a failed channel is unregistered.
        """
        channel = self._channels.get(user_id)
        if channel is None:
            return False
        if not is_open(channel):
            self.unregister(user_id, channel)
            return False
        try:
            await channel.send_json(payload)
        except Exception as exc:
            logger.warning("Push to user %s failed: %s", user_id, exc)
            self.unregister(user_id, channel)
            return False
        return True

    async def clear(self) -> None:
        """Close every registered channel and forget them all."""
        channels = list(self._channels.items())
        self._channels.clear()
        for user_id, channel in channels:
            try:
                await channel.close(code=1001)
            except Exception as exc:
                logger.debug("Channel for user %s failed to close on shutdown: %s", user_id, exc)
        if channels:
            logger.info("Connection registry cleared (%d channels closed)", len(channels))
