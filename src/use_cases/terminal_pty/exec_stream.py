"""
Exec Stream

Byte stream of an attached Docker exec instance (the hijacked HTTP
connection returned by exec_start with socket=True).
"""

import socket
import threading

from tools.errors import StreamIOError
from tools.logger import log_debug


class ExecStream:
    """
    Blocking reader/writer over an exec socket.

    read() and write() are meant to run on worker threads. shutdown() is
    the advisory cancellation: it makes a pending read return b"" without
    releasing the descriptor. close() releases it, at most once.
    """

    def __init__(self, exec_id: str, sock):
        self.exec_id = exec_id
        self._sock = sock
        # docker returns a SocketIO wrapper on unix sockets, a raw socket otherwise
        self._raw = getattr(sock, "_sock", sock)
        self._lock = threading.Lock()
        self._shut_down = False
        self._closed = False

        # The SDK leaves its request timeout on the socket, an idle shell must not time out
        self._raw.settimeout(None)

    def read(self, size: int) -> bytes:
        """
        Read up to `size` bytes. Returns b"" on end of stream or after shutdown.

        Raises:
            StreamIOError: on any other socket failure
        """
        try:
            return self._raw.recv(size)
        except OSError as e:
            if self._shut_down or self._closed:
                return b""
            raise StreamIOError(f"read from exec {self.exec_id[:12]} failed: {e}") from e

    def write(self, data: bytes) -> None:
        try:
            self._raw.sendall(data)
        except OSError as e:
            raise StreamIOError(f"write to exec {self.exec_id[:12]} failed: {e}") from e

    def shutdown(self) -> None:
        with self._lock:
            if self._shut_down or self._closed:
                return
            self._shut_down = True
        try:
            self._raw.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            log_debug(f"Exec {self.exec_id[:12]} socket already disconnected: {e}")

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        for handle in (self._sock, self._raw):
            try:
                handle.close()
            except OSError as e:
                log_debug(f"Error closing exec {self.exec_id[:12]} socket: {e}")

    @property
    def closed(self) -> bool:
        return self._closed
