from quart import websocket
from controllers.http_controller.transport import WebsocketTransport
from use_cases.terminal_pty import PTYBridge
from tools.contract_validation import ATTACH_QUERY
from tools.errors import TransportUpgradeError
from tools.logger import *
from . import route, validate_query

NAME = "attach"


@route(NAME)
def init(app, runtime, settings):
    """
    Serve an interactive shell of a container over a websocket.

    GET /attach?id=<container>

    Frames:
        Binary, both directions: raw terminal bytes
        From the client, payload starting with "{":
            {"type": "resize", "cols": 120, "rows": 40}
            resizes the exec PTY and is never written to the shell

    A missing or invalid id is answered with 400 before the upgrade.
    If the exec cannot be created, the client gets one text frame with
    the error and the connection is closed.
    """

    @app.websocket(f"/{NAME}", endpoint=NAME)
    @validate_query(ATTACH_QUERY, NAME, websocket)
    async def callback(params):
        container_id = params["id"]
        transport = WebsocketTransport(websocket._get_current_object())

        try:
            await transport.accept()
        except TransportUpgradeError as e:
            log_error(str(e))
            return None

        log_info(f"Creating exec in container {container_id}")
        bridge = PTYBridge(container_id, transport, runtime, settings)
        await bridge.run()
        return None
