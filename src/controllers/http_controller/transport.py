from typing import Union

from tools.errors import NORMAL_CLOSURE, StreamIOError, TransportUpgradeError


class WebsocketTransport:
    """
    Adapts a Quart websocket to the transport expected by PTYBridge.

    Quart cancels the handler when the client disconnects, so a close
    frame never reaches receive() here. It surfaces as cancellation of
    the bridge instead. receive() therefore never returns None or raises
    TransportClosed; the bridge handles those for transports that report
    a close frame or close code in-band.
    """

    def __init__(self, ws):
        self._ws = ws

    async def accept(self) -> None:
        try:
            await self._ws.accept()
        except Exception as e:
            raise TransportUpgradeError(f"websocket upgrade failed: {e}") from e

    async def receive(self) -> Union[bytes, str]:
        try:
            return await self._ws.receive()
        except Exception as e:
            raise StreamIOError(f"read from websocket failed: {e}") from e

    async def send(self, data: Union[bytes, str]) -> None:
        try:
            await self._ws.send(data)
        except Exception as e:
            raise StreamIOError(f"write to websocket failed: {e}") from e

    async def close(self, code: int = NORMAL_CLOSURE) -> None:
        await self._ws.close(code)
