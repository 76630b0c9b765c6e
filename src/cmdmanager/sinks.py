# sinks.py
from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import IO, List, Optional

log = logging.getLogger(__name__)


class OutputSink(ABC):
    """Append-only destination for decoded result lines."""

    @abstractmethod
    def write_line(self, text: str) -> None:
        """Append one logical line."""


class ConsoleSink(OutputSink):
    """Writes each line to a text stream (stdout unless told otherwise)."""

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream

    def write_line(self, text: str) -> None:
        # Looked up per call; sys.stdout may be swapped after construction.
        stream = self._stream or sys.stdout
        stream.write(text + "\n")
        stream.flush()


class ListSink(OutputSink):
    """In-memory sink that keeps every emitted line."""

    def __init__(self) -> None:
        self.lines: List[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def clear(self) -> None:
        self.lines.clear()


class LoggingSink(OutputSink):
    """Routes decoded lines to a logger at a fixed level, one record per line."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self.logger = logger or log
        self.level = level

    def write_line(self, text: str) -> None:
        self.logger.log(self.level, "%s", text, extra={"keep_repeats": True})


def build_sink(kind: str) -> OutputSink:
    """
    Build a sink by its configuration name.

    Args:
        kind: "console" or "log".

    Returns:
        The matching OutputSink.

    Raises:
        ValueError: For an unknown sink name.
    """
    if kind == "console":
        return ConsoleSink()
    if kind == "log":
        return LoggingSink()
    raise ValueError(f"Unsupported sink {kind!r}")
