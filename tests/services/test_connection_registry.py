# tests/services/test_connection_registry.py
from unittest.mock import AsyncMock

import pytest
from starlette.websockets import WebSocketState

from matchai.services.connection_registry import ConnectionRegistry, is_open


class FakeChannel:
    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.closed_with: int | None = None
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_json(self, data) -> None:
        self.sent.append(data)

    async def close(self, code: int = 1000) -> None:
        self.closed_with = code
        self.application_state = WebSocketState.DISCONNECTED


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest.mark.asyncio
async def test_register_and_send(registry) -> None:
    channel = FakeChannel()
    assert await registry.register(7, channel) is None

    assert 7 in registry
    assert registry.lookup(7) is channel
    assert await registry.send_to(7, {"type": "ping"}) is True
    assert channel.sent == [{"type": "ping"}]


@pytest.mark.asyncio
async def test_send_to_absent_user(registry) -> None:
    assert await registry.send_to(99, {"type": "ping"}) is False


@pytest.mark.asyncio
async def test_reregister_supersedes_and_closes_previous(registry) -> None:
    old, new = FakeChannel(), FakeChannel()
    await registry.register(7, old)

    assert await registry.register(7, new) is old
    assert old.closed_with == 1000
    assert registry.lookup(7) is new
    assert len(registry) == 1


@pytest.mark.asyncio
async def test_registering_same_channel_twice_is_harmless(registry) -> None:
    channel = FakeChannel()
    await registry.register(7, channel)

    assert await registry.register(7, channel) is None
    assert channel.closed_with is None


@pytest.mark.asyncio
async def test_late_unregister_of_superseded_channel_keeps_replacement(registry) -> None:
    old, new = FakeChannel(), FakeChannel()
    await registry.register(7, old)
    await registry.register(7, new)

    assert registry.unregister(7, old) is False
    assert registry.lookup(7) is new
    assert registry.unregister(7, new) is True
    assert 7 not in registry


@pytest.mark.asyncio
async def test_failed_send_unregisters(registry) -> None:
    channel = FakeChannel()
    channel.send_json = AsyncMock(side_effect=RuntimeError("socket gone"))
    await registry.register(3, channel)

    assert await registry.send_to(3, {"type": "ping"}) is False
    assert 3 not in registry


@pytest.mark.asyncio
async def test_closed_channel_is_not_written(registry) -> None:
    channel = FakeChannel()
    await registry.register(3, channel)
    channel.client_state = WebSocketState.DISCONNECTED

    assert await registry.send_to(3, {"type": "ping"}) is False
    assert channel.sent == []
    assert 3 not in registry


@pytest.mark.asyncio
async def test_clear_closes_everything(registry) -> None:
    first, second = FakeChannel(), FakeChannel()
    await registry.register(1, first)
    await registry.register(2, second)

    await registry.clear()

    assert len(registry) == 0
    assert first.closed_with == second.closed_with == 1001


def test_is_open_without_state_attributes() -> None:
    class Bare:
        async def send_json(self, data) -> None: ...

        async def close(self, code: int = 1000) -> None: ...

    assert is_open(Bare()) is True
