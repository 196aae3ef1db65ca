"""Tests for the Quart websocket transport adapter."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from controllers.http_controller.transport import WebsocketTransport
from tools.errors import GOING_AWAY, NORMAL_CLOSURE, StreamIOError, TransportUpgradeError


@pytest.fixture
def ws() -> AsyncMock:
    return AsyncMock()


class TestWebsocketTransport:

    @pytest.mark.asyncio
    async def test_accept(self, ws: AsyncMock) -> None:
        await WebsocketTransport(ws).accept()
        ws.accept.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_accept_failure_is_an_upgrade_error(self, ws: AsyncMock) -> None:
        ws.accept.side_effect = RuntimeError("handshake rejected")

        with pytest.raises(TransportUpgradeError, match="handshake rejected"):
            await WebsocketTransport(ws).accept()

    @pytest.mark.asyncio
    async def test_receive_passes_frames_through(self, ws: AsyncMock) -> None:
        ws.receive.side_effect = [b"ls\n", '{"type":"resize","cols":80,"rows":24}']
        transport = WebsocketTransport(ws)

        assert await transport.receive() == b"ls\n"
        assert await transport.receive() == '{"type":"resize","cols":80,"rows":24}'

    @pytest.mark.asyncio
    async def test_receive_failure_is_a_stream_error(self, ws: AsyncMock) -> None:
        ws.receive.side_effect = ConnectionResetError("reset by peer")

        with pytest.raises(StreamIOError, match="read from websocket failed"):
            await WebsocketTransport(ws).receive()

    @pytest.mark.asyncio
    async def test_send_failure_is_a_stream_error(self, ws: AsyncMock) -> None:
        ws.send.side_effect = ConnectionResetError("reset by peer")

        with pytest.raises(StreamIOError, match="write to websocket failed"):
            await WebsocketTransport(ws).send(b"output")

    @pytest.mark.asyncio
    async def test_close_defaults_to_normal_closure(self, ws: AsyncMock) -> None:
        await WebsocketTransport(ws).close()
        ws.close.assert_awaited_once_with(NORMAL_CLOSURE)

    @pytest.mark.asyncio
    async def test_close_with_code(self, ws: AsyncMock) -> None:
        await WebsocketTransport(ws).close(GOING_AWAY)
        ws.close.assert_awaited_once_with(GOING_AWAY)
