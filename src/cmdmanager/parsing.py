# parsing.py
from __future__ import annotations

import re
from typing import List, Optional

from .model import (
    MIN_MESSAGE_LENGTH,
    OPCODE_LENGTH,
    TERMINATOR,
    Frame,
    ParseResult,
)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def split_frame(message: str) -> Optional[Frame]:
    """
    Check message framing and split it into opcode and payload.

    Args:
        message: Raw message text, expected to end with the terminator.

    Returns:
        Frame with the opcode text and payload, or None when the message is
        unterminated or too short to carry an opcode.
    """
    if not message or not message.endswith(TERMINATOR):
        return None
    if len(message) < MIN_MESSAGE_LENGTH:
        return None

    opcode_text = message[:OPCODE_LENGTH]
    payload = message[OPCODE_LENGTH:]
    # Only one trailing terminator belongs to the frame.
    if payload and payload.endswith(TERMINATOR):
        payload = payload[: -len(TERMINATOR)]
    return Frame(opcode_text=opcode_text, payload=payload)


def parse_int(text: str) -> ParseResult[int]:
    """Parse a whole signed 32-bit decimal integer."""
    if not _INT_RE.fullmatch(text):
        return ParseResult.failure(f"not an integer: {text!r}")
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        return ParseResult.failure(f"integer out of range: {text!r}")
    return ParseResult.success(value)


def parse_float(text: str) -> ParseResult[float]:
    """Parse a decimal number; no inf/nan, whitespace or digit separators."""
    if not _FLOAT_RE.fullmatch(text):
        return ParseResult.failure(f"not a number: {text!r}")
    value = float(text)
    if value in (float("inf"), float("-inf")):
        return ParseResult.failure(f"number out of range: {text!r}")
    return ParseResult.success(value)


def tokenize_parameters(payload: str) -> List[str]:
    """Split a parameter list on commas, dropping empty segments."""
    return [token for token in payload.split(",") if token]


def format_value(value: float) -> str:
    """Render a parameter value with 6 significant digits."""
    return f"{value:g}"
