"""
PTY Bridge

Bridges a client transport (WebSocket) to a Docker exec PTY.
Handles bidirectional I/O between browser terminal and container shell.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from tools.docker_tools import RuntimeClient
from tools.errors import RuntimeUnavailableError, StreamIOError, TransportClosed
from tools.logger import log_debug, log_error, log_info, log_warning
from tools.settings import ProxySettings
from use_cases.terminal_pty.control_frames import ResizeCommand, demultiplex
from use_cases.terminal_pty.create_pty_session import (
    ExecSession,
    close_pty_session,
    create_pty_session,
    resize_pty_session,
)


class CancelScope:
    """
    Cancellation shared by the two loops of one session.

    Cancelling is idempotent and advisory: it runs the registered callbacks
    once (closing the read side of the resources the loops block on) and
    never closes a handle for good, teardown does that.
    """

    def __init__(self):
        self._callbacks: List[Callable[[], None]] = []
        self._cancelled = False

    def add_callback(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        for callback in self._callbacks:
            try:
                callback()
            except Exception as e:
                log_debug(f"Cancel callback failed: {e}")

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class PTYBridge:
    """
    Couples one client transport to one Docker exec PTY for the lifetime of both.

    The transport must provide:
        async receive() -> bytes | str, or None for a close frame
            (may raise TransportClosed or StreamIOError)
        async send(data: bytes | str)
        async close()

    The bridge owns both the exec stream and the transport. It closes each
    of them exactly once, after both copy loops have returned, whatever
    ended the session.
    """

    def __init__(
        self,
        container_id: str,
        transport,
        runtime: RuntimeClient,
        settings: ProxySettings,
    ):
        self.container_id = container_id
        self.transport = transport
        self.runtime = runtime
        self.settings = settings

        self._session: Optional[ExecSession] = None
        self._scope = CancelScope()
        self._transport_closed = False
        # One thread blocks on exec reads, the other serves exec writes
        self._executor = ThreadPoolExecutor(
            max_workers=2,
            thread_name_prefix=f"pty_{container_id[:12]}",
        )

    async def run(self) -> None:
        """
        Create the exec session and copy data both ways until either side ends.
        """
        try:
            try:
                self._session = await create_pty_session(
                    self.runtime, self.container_id, self.settings
                )
            except RuntimeUnavailableError as e:
                log_error(f"Cannot open PTY on container {self.container_id}: {e}")
                await self._report_error(str(e))
                return

            self._scope.add_callback(self._session.stream.shutdown)
            await self._pump()
        finally:
            await self._teardown()

    async def _pump(self) -> None:
        log_info(
            f"Attached to exec {self._session.exec_id[:12]} in container "
            f"{self.container_id}, starting bidirectional pipe"
        )

        outbound = asyncio.create_task(self._outbound_loop())
        inbound = asyncio.create_task(self._inbound_loop())
        try:
            await asyncio.wait({outbound, inbound}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            self._scope.cancel()
            # Transport reads are awaitables, cancelling the task releases them
            if not inbound.done():
                inbound.cancel()
            results = await asyncio.gather(outbound, inbound, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    log_error(f"Copy loop for container {self.container_id} crashed: {result!r}")

    async def _outbound_loop(self) -> None:
        """
        Exec -> client. Every non-empty read becomes one binary frame.
        """
        loop = asyncio.get_running_loop()
        stream = self._session.stream
        try:
            while True:
                data = await loop.run_in_executor(
                    self._executor, stream.read, self.settings.read_buffer_size
                )
                if not data:
                    log_debug(f"Exec {stream.exec_id[:12]} reached end of stream")
                    return
                if self._scope.cancelled:
                    return
                try:
                    await asyncio.wait_for(
                        self.transport.send(data),
                        timeout=self.settings.write_deadline,
                    )
                except asyncio.TimeoutError:
                    raise StreamIOError(
                        f"write to websocket exceeded {self.settings.write_deadline}s deadline"
                    ) from None
        except StreamIOError as e:
            log_error(f"Outbound copy for container {self.container_id} stopped: {e}")
        finally:
            self._scope.cancel()

    async def _inbound_loop(self) -> None:
        """
        Client -> exec. Resize frames are applied, everything else is written as input.
        """
        loop = asyncio.get_running_loop()
        stream = self._session.stream
        try:
            while not self._scope.cancelled:
                frame = await self.transport.receive()
                if frame is None:
                    log_debug(f"Client closed terminal of container {self.container_id}")
                    return

                payload = frame.encode("utf-8") if isinstance(frame, str) else frame
                if not payload:
                    continue

                command = demultiplex(payload)
                if command is not None:
                    await self._resize(command)
                    continue

                await loop.run_in_executor(self._executor, stream.write, payload)
        except TransportClosed as e:
            if e.is_expected:
                log_debug(f"Client closed terminal of container {self.container_id}: {e}")
            else:
                log_warning(f"Client connection for container {self.container_id} lost: {e}")
        except StreamIOError as e:
            log_error(f"Inbound copy for container {self.container_id} stopped: {e}")
        finally:
            self._scope.cancel()

    async def _resize(self, command: ResizeCommand) -> None:
        error = await resize_pty_session(
            self.runtime, self._session.exec_id, command.cols, command.rows
        )
        if error:
            log_warning(f"PTY resize warning: {error}")

    async def _report_error(self, message: str) -> None:
        try:
            await self.transport.send(message)
        except Exception as e:
            log_debug(f"Could not report error to client: {e}")

    async def _teardown(self) -> None:
        if self._session is not None:
            close_pty_session(self._session)

        if not self._transport_closed:
            self._transport_closed = True
            try:
                await self.transport.close()
            except Exception as e:
                log_debug(f"Error closing transport: {e}")

        self._executor.shutdown(wait=False)

        if self._session is not None:
            log_info(
                f"Session ended for container {self.container_id} "
                f"(exec {self._session.exec_id[:12]})"
            )

    @property
    def session(self) -> Optional[ExecSession]:
        return self._session

    @property
    def is_cancelled(self) -> bool:
        return self._scope.cancelled
