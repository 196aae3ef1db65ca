import asyncio
from typing import Dict

from tools.docker_tools import RuntimeClient, run_health_check
from tools.errors import RuntimeUnavailableError
from tools.logger import log_debug, log_warning


async def get_runtime_status(runtime: RuntimeClient, timeout: float) -> Dict[str, str]:
    """
    Probe the Docker daemon once, bounded by `timeout` seconds.

    Returns:
        {"status": "ok", "docker_api": <negotiated API version>}

    Raises:
        RuntimeUnavailableError: if the daemon errors or does not answer in time
    """
    try:
        version = await asyncio.wait_for(run_health_check(runtime.ping), timeout=timeout)
    except asyncio.TimeoutError:
        log_warning(f"Docker ping timed out after {timeout}s")
        raise RuntimeUnavailableError("ping", f"timed out after {timeout}s") from None
    except RuntimeUnavailableError as e:
        log_warning(f"Docker ping failed: {e}")
        raise

    log_debug(f"Docker daemon answered ping (API {version})")
    return {"status": "ok", "docker_api": version}
