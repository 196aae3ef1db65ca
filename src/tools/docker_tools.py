import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

import docker
from docker.errors import APIError, DockerException, NotFound

from tools.errors import RuntimeUnavailableError
from tools.logger import log_debug, log_info

## Thread pool for short blocking Docker control calls (create, resize).
## Streaming I/O never runs here, every session owns its own threads.
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="docker_")

## Health pings run apart so a hung daemon cannot starve session control calls
_health_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="docker_health_")

## requests errors are OSError subclasses
RUNTIME_ERRORS = (DockerException, OSError)


async def run_blocking(func: Callable, *args):
    """Run a blocking Docker call on the control thread pool."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_executor, func, *args)


async def run_health_check(func: Callable, *args):
    """Run a blocking Docker health call on its own thread pool."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_health_executor, func, *args)


def _describe(error: Exception) -> str:
    if isinstance(error, NotFound):
        return f"not found: {error.explanation or error}"
    if isinstance(error, APIError):
        return f"Docker API error: {error.explanation or error}"
    return str(error) or error.__class__.__name__


class RuntimeClient:
    """
    Thin wrapper around the Docker low-level API.

    The SDK client is created on first use so the process can start (and
    report unavailability on /healthz) while the daemon is still down.
    Every failure surfaces as RuntimeUnavailableError.
    """

    def __init__(self, factory: Callable[[], docker.DockerClient] = docker.from_env):
        self._factory = factory
        self._api: Optional[docker.APIClient] = None
        self._lock = threading.Lock()

    @property
    def api(self) -> docker.APIClient:
        with self._lock:
            if self._api is None:
                self._api = self._factory().api
                log_info(f"Docker client ready (API {self._api.api_version}, {self._api.base_url})")
            return self._api

    def exec_create(
        self,
        container_id: str,
        command: List[str],
        tty: bool,
        environment: List[str],
        workdir: str,
    ) -> str:
        """
        Create an interactive exec instance and return its id.
        """
        try:
            exec_instance = self.api.exec_create(
                container_id,
                command,
                stdin=True,
                stdout=True,
                stderr=True,
                tty=tty,
                environment=environment,
                workdir=workdir,
            )
        except RUNTIME_ERRORS as e:
            raise RuntimeUnavailableError("exec create", _describe(e)) from e

        exec_id = exec_instance["Id"]
        log_debug(f"Created exec instance {exec_id[:12]} in container {container_id}")
        return exec_id

    def exec_attach(self, exec_id: str):
        """
        Start the exec instance and return its hijacked socket.
        """
        # Module-level import would cycle: the terminal_pty package __init__
        # loads pty_bridge, which imports RuntimeClient from this module
        from use_cases.terminal_pty.exec_stream import ExecStream

        try:
            sock = self.api.exec_start(exec_id, tty=True, socket=True, demux=False)
        except RUNTIME_ERRORS as e:
            raise RuntimeUnavailableError("exec attach", _describe(e)) from e

        return ExecStream(exec_id, sock)

    def exec_resize(self, exec_id: str, cols: int, rows: int) -> None:
        try:
            self.api.exec_resize(exec_id, height=rows, width=cols)
        except RUNTIME_ERRORS as e:
            raise RuntimeUnavailableError("exec resize", _describe(e)) from e

    def container_resize(self, container_id: str, cols: int, rows: int) -> None:
        try:
            self.api.resize(container_id, height=rows, width=cols)
        except RUNTIME_ERRORS as e:
            raise RuntimeUnavailableError("container resize", _describe(e)) from e

    def ping(self) -> str:
        """
        Ping the daemon and return the negotiated API version.
        """
        try:
            api = self.api
            api.ping()
        except RUNTIME_ERRORS as e:
            raise RuntimeUnavailableError("ping", _describe(e)) from e
        return api.api_version
