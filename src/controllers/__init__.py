from typing import Optional
from quart import Quart
from .http_controller import init as init_http_controller
from tools.docker_tools import RuntimeClient
from tools.errors import RuntimeUnavailableError
from tools.logger import *
from tools.settings import ProxySettings
from use_cases.docker_manager.get_runtime_status import get_runtime_status


def create_app(settings: ProxySettings, runtime: Optional[RuntimeClient] = None) -> Quart:
    """
    Build the Quart application serving /attach, /resize and /healthz.

    `settings` and `runtime` are shared by every request and session.
    """
    if runtime is None:
        runtime = RuntimeClient()

    app = Quart("docker_pty_proxy")
    init_http_controller(app, runtime, settings)

    @app.before_serving
    async def check_docker():
        try:
            status = await get_runtime_status(runtime, settings.health_timeout)
        except RuntimeUnavailableError as e:
            log_warning(f"{e} (service will start but may not work)")
        else:
            log_info(f"Docker daemon connected (API {status['docker_api']})")

    return app
