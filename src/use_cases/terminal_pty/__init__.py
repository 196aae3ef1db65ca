"""
Terminal PTY Use Case

Provides terminal access to containers via Docker exec.
Bridges WebSocket connections to container PTY sessions.
"""

from use_cases.terminal_pty.pty_bridge import PTYBridge, CancelScope
from use_cases.terminal_pty.create_pty_session import (
    ExecSession,
    create_pty_session,
    resize_pty_session,
    close_pty_session,
)
from use_cases.terminal_pty.control_frames import ResizeCommand, demultiplex

__all__ = [
    "PTYBridge",
    "CancelScope",
    "ExecSession",
    "ResizeCommand",
    "demultiplex",
    "create_pty_session",
    "resize_pty_session",
    "close_pty_session",
]
