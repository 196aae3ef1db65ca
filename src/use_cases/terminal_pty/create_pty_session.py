"""
Create PTY Session

Creates an interactive PTY session on a container using Docker exec.
"""

from dataclasses import dataclass
from typing import Optional

from tools.docker_tools import RuntimeClient, run_blocking
from tools.errors import RuntimeUnavailableError
from tools.logger import log_debug, log_info, log_warning
from tools.settings import ProxySettings
from use_cases.terminal_pty.exec_stream import ExecStream


@dataclass
class ExecSession:
    container_id: str
    exec_id: str
    stream: ExecStream


def _create_exec_sync(
    runtime: RuntimeClient,
    container_id: str,
    settings: ProxySettings,
) -> ExecSession:
    """
    Synchronous function to create and attach a Docker exec instance.

    Raises:
        RuntimeUnavailableError: if either the create or the attach step fails
    """
    exec_id = runtime.exec_create(
        container_id,
        list(settings.shell),
        tty=True,
        environment=list(settings.environment),
        workdir=settings.workdir,
    )
    stream = runtime.exec_attach(exec_id)

    log_info(f"PTY session started for container {container_id} (exec_id: {exec_id[:12]})")
    return ExecSession(container_id=container_id, exec_id=exec_id, stream=stream)


async def create_pty_session(
    runtime: RuntimeClient,
    container_id: str,
    settings: ProxySettings,
) -> ExecSession:
    """
    Create an interactive PTY session on a container.

    This is an async wrapper that offloads blocking Docker operations
    to a thread pool to avoid blocking the event loop.

    Args:
        runtime: Docker runtime client
        container_id: Name or id of the target container
        settings: Shell command, environment and working directory to use

    Returns:
        The attached ExecSession. No exec is left open when this raises.
    """
    return await run_blocking(_create_exec_sync, runtime, container_id, settings)


def _resize_exec_sync(runtime: RuntimeClient, exec_id: str, cols: int, rows: int) -> Optional[str]:
    try:
        runtime.exec_resize(exec_id, cols, rows)
    except RuntimeUnavailableError as e:
        return f"Failed to resize PTY: {e}"
    log_debug(f"Resized exec {exec_id[:12]} to {cols}x{rows}")
    return None


async def resize_pty_session(
    runtime: RuntimeClient,
    exec_id: str,
    cols: int,
    rows: int,
) -> Optional[str]:
    """
    Resize a PTY session.

    Args:
        runtime: Docker runtime client
        exec_id: Docker exec instance ID
        cols: New column count
        rows: New row count

    Returns:
        Error message if failed, None if successful
    """
    return await run_blocking(_resize_exec_sync, runtime, exec_id, cols, rows)


def close_pty_session(session: ExecSession) -> None:
    """
    Release the exec socket of a PTY session.

    Docker has no call to terminate an exec. Closing the socket hangs up
    the terminal, which ends the shell.
    """
    if session.stream.closed:
        log_warning(f"PTY session {session.exec_id[:12]} was already closed")
        return
    session.stream.close()
    log_info(f"PTY session {session.exec_id[:12]} closed")
