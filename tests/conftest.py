"""Shared test fixtures for the docker-pty-proxy test suite.

Provides in-memory stand-ins for the three things a terminal session
touches: the Docker runtime, the attached exec stream and the client
transport.
"""

from __future__ import annotations

import asyncio
import queue
import threading
import time
from typing import Any

import pytest

from tools.settings import ProxySettings

EXEC_ID = "5f3c0a8d2b7e41c9a6d8e0f1b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5"


class FakeExecStream:
    """Mimics ExecStream. read() blocks on a queue, like a socket would."""

    def __init__(self, chunks: tuple[Any, ...] = (), eof: bool = True) -> None:
        self.exec_id = EXEC_ID
        self.written: list[bytes] = []
        self.write_error: Exception | None = None
        self.shutdown_calls = 0
        self.close_calls = 0
        self._queue: queue.Queue = queue.Queue()
        self._pending = b""
        for chunk in chunks:
            self.feed(chunk)
        if eof:
            self.feed(b"")

    def feed(self, chunk: Any) -> None:
        """Queue bytes to be read, b"" for end of stream or an exception to raise."""
        self._queue.put(chunk)

    def read(self, size: int) -> bytes:
        if not self._pending:
            item = self._queue.get()
            if isinstance(item, Exception):
                raise item
            if not item:
                return b""
            self._pending = item
        data, self._pending = self._pending[:size], self._pending[size:]
        return data

    def write(self, data: bytes) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.written.append(data)

    def shutdown(self) -> None:
        self.shutdown_calls += 1
        self._queue.put(b"")

    def close(self) -> None:
        self.close_calls += 1

    @property
    def closed(self) -> bool:
        return self.close_calls > 0


class FakeTransport:
    """Mimics the websocket transport. None in `incoming` is a close frame."""

    def __init__(self, *frames: Any) -> None:
        self.incoming: asyncio.Queue = asyncio.Queue()
        self.sent: list[bytes | str] = []
        self.send_delay: float | None = None
        self.close_calls = 0
        for frame in frames:
            self.incoming.put_nowait(frame)

    async def receive(self) -> Any:
        item = await self.incoming.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def send(self, data: bytes | str) -> None:
        if self.send_delay is not None:
            await asyncio.sleep(self.send_delay)
        self.sent.append(data)

    async def close(self) -> None:
        self.close_calls += 1


class FakeRuntime:
    """Mimics RuntimeClient and records every call."""

    def __init__(self, stream: FakeExecStream | None = None) -> None:
        self.stream = stream if stream is not None else FakeExecStream()
        self.version = "1.45"
        self.create_error: Exception | None = None
        self.attach_error: Exception | None = None
        self.resize_error: Exception | None = None
        self.container_resize_error: Exception | None = None
        self.ping_error: Exception | None = None
        self.ping_delay = 0.0
        # While set, ping blocks until the event is released
        self.ping_hang: threading.Event | None = None
        self.exec_create_calls: list[dict[str, Any]] = []
        self.exec_resize_calls: list[tuple[str, int, int]] = []
        self.container_resize_calls: list[tuple[str, int, int]] = []

    def exec_create(self, container_id, command, tty, environment, workdir):
        self.exec_create_calls.append(
            {
                "container_id": container_id,
                "command": command,
                "tty": tty,
                "environment": environment,
                "workdir": workdir,
            }
        )
        if self.create_error is not None:
            raise self.create_error
        return self.stream.exec_id

    def exec_attach(self, exec_id):
        if self.attach_error is not None:
            raise self.attach_error
        return self.stream

    def exec_resize(self, exec_id, cols, rows):
        self.exec_resize_calls.append((exec_id, cols, rows))
        if self.resize_error is not None:
            raise self.resize_error

    def container_resize(self, container_id, cols, rows):
        self.container_resize_calls.append((container_id, cols, rows))
        if self.container_resize_error is not None:
            raise self.container_resize_error

    def ping(self):
        if self.ping_hang is not None:
            self.ping_hang.wait()
        if self.ping_delay:
            time.sleep(self.ping_delay)
        if self.ping_error is not None:
            raise self.ping_error
        return self.version


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll `predicate` until it holds, failing the test after `timeout`."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.01)


@pytest.fixture
def settings() -> ProxySettings:
    return ProxySettings()


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime()
