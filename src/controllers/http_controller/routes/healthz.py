from use_cases.docker_manager.get_runtime_status import get_runtime_status
from tools.errors import RuntimeUnavailableError
from . import route

NAME = "healthz"


@route(NAME)
def init(app, runtime, settings):
    """
    GET /healthz

    Returns:
        200 {"status": "ok", "docker_api": "<version>"}
        503 "docker unreachable: <detail>" on error or after the probe timeout
    """

    @app.route(f"/{NAME}", methods=["GET"], endpoint=NAME)
    async def callback():
        try:
            status = await get_runtime_status(runtime, settings.health_timeout)
        except RuntimeUnavailableError as e:
            return f"docker unreachable: {e.detail}", 503

        return status, 200
