"""
Error taxonomy shared by the session bridge and the HTTP routes.

Every error that can end a terminal session is handled inside the bridge
(logged and turned into teardown). Route-level errors are turned into
status codes by the controllers. Nothing here is retried.
"""

from typing import Optional

NORMAL_CLOSURE = 1000
GOING_AWAY = 1001


class ProxyError(Exception):
    """Base class for all proxy errors."""


class TransportUpgradeError(ProxyError):
    """The WebSocket handshake failed. No session resource exists yet."""


class RuntimeUnavailableError(ProxyError):
    """
    A call to the container runtime failed or timed out.

    Args:
        stage: Runtime operation that failed (e.g. "exec create", "ping")
        detail: Human readable cause
    """

    def __init__(self, stage: str, detail: str):
        self.stage = stage
        self.detail = detail
        super().__init__(f"{stage} error: {detail}")


class StreamIOError(ProxyError):
    """A read or write on either side of a live session failed."""


class ControlParseError(ProxyError):
    """A payload starting with '{' is not a well-formed resize command."""


class ValidationError(ProxyError):
    """A request parameter or control field is missing or invalid."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class TransportClosed(ProxyError):
    """The client sent a close frame."""

    def __init__(self, code: Optional[int] = None, reason: str = ""):
        self.code = code
        self.reason = reason
        super().__init__(f"transport closed (code={code}, reason={reason!r})")

    @property
    def is_expected(self) -> bool:
        """Normal and going-away closures are not worth an error log."""
        return self.code in (None, NORMAL_CLOSURE, GOING_AWAY)
