from quart import request
from use_cases.docker_manager.resize_container import resize_container
from tools.contract_validation import RESIZE_QUERY
from tools.logger import *
from . import route, validate_query

NAME = "resize"


@route(NAME)
def init(app, runtime, settings):
    """
    Resize the TTY of a whole container.

    POST /resize?id=<container>&w=<cols>&h=<rows>

    Returns:
        200 "ok"
        400 on a missing or invalid id, w or h
        500 when Docker refuses the resize
    """

    @app.route(f"/{NAME}", methods=["POST"], endpoint=NAME)
    @validate_query(RESIZE_QUERY, NAME, request)
    async def callback(params):
        container_id = params["id"]
        cols, rows = params["w"], params["h"]

        error = await resize_container(runtime, container_id, cols, rows)
        if error:
            return error, 500

        log_info(f"Resized container {container_id} to {cols}x{rows}")
        return "ok", 200
