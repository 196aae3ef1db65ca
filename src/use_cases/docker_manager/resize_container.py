from tools.docker_tools import RuntimeClient, run_blocking
from tools.errors import RuntimeUnavailableError
from tools.logger import log_debug, log_warning
from typing import Optional


def _resize_container_sync(
    runtime: RuntimeClient, container_id: str, cols: int, rows: int
) -> Optional[str]:
    try:
        runtime.container_resize(container_id, cols, rows)
    except RuntimeUnavailableError as e:
        log_warning(f"Resize of container {container_id} failed: {e}")
        return f"resize failed: {e.detail}"
    log_debug(f"Resized container {container_id} to {cols}x{rows}")
    return None


async def resize_container(
    runtime: RuntimeClient, container_id: str, cols: int, rows: int
) -> Optional[str]:
    """
    Resize the TTY of the container's main process.

    This is independent of any exec session open on the container: the
    last resize applied by either path is what the daemon keeps.

    Returns:
        Error message if failed, None if successful
    """
    return await run_blocking(_resize_container_sync, runtime, container_id, cols, rows)
