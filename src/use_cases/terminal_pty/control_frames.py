"""
Control Frames

Separates inline resize commands from raw terminal input.

A payload whose first byte is "{" is tried as a resize command:
    {"type": "resize", "cols": 120, "rows": 40}

Every other payload, and every "{" payload that is not a well-formed
resize command, is terminal input. Frames are judged one at a time, a
command split over several frames is just input.
"""

import json
from dataclasses import dataclass
from typing import Optional

from tools.contract_validation import RESIZE_FRAME, validate_contract
from tools.errors import ControlParseError, ValidationError
from tools.logger import log_debug

RESIZE = "resize"


@dataclass(frozen=True)
class ResizeCommand:
    cols: int
    rows: int


def parse_resize_command(payload: bytes) -> ResizeCommand:
    """
    Parse a payload as a resize command.

    Raises:
        ControlParseError: if the payload is not JSON, not an object, has a
            type other than "resize" or carries invalid dimensions
    """
    try:
        message = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ControlParseError(f"not a JSON control frame: {e}") from e

    if not isinstance(message, dict):
        raise ControlParseError("control frame is not a JSON object")

    try:
        fields = validate_contract(RESIZE_FRAME, message)
    except ValidationError as e:
        raise ControlParseError(e.message) from e

    if fields["type"] != RESIZE:
        raise ControlParseError(f"unsupported control frame type {fields['type']!r}")

    return ResizeCommand(cols=fields["cols"], rows=fields["rows"])


def demultiplex(payload: bytes) -> Optional[ResizeCommand]:
    """
    Classify one non-empty inbound payload.

    Returns:
        The ResizeCommand to apply, or None if the payload is terminal input
    """
    if not payload.startswith(b"{"):
        return None

    try:
        return parse_resize_command(payload)
    except ControlParseError as e:
        log_debug(f"Forwarding {len(payload)} bytes as terminal input: {e}")
        return None
