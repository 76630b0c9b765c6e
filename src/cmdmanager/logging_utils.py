# logging_utils.py
import logging
import sys
from typing import IO, Optional, Tuple


class RepeatCollapsingHandler(logging.StreamHandler):
    """
    Stream handler that folds identical consecutive records into one line.

    The first record of a run is written in full; repeats are only counted.
    When a different record arrives (or the handler closes) the pending line
    is finished with a "(xN)" suffix if it repeated.
    Records logged with `extra={"keep_repeats": True}` are always written on
    their own line.
    """

    terminator = "\n"

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        super().__init__(stream)
        self._pending_key: Optional[Tuple[int, str, str]] = None
        self._pending_count = 0

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if getattr(record, "keep_repeats", False):
                self._finish_pending()
                self.stream.write(self.format(record) + self.terminator)
                self.flush()
                return

            key = (record.levelno, record.name, record.getMessage())
            if key == self._pending_key:
                self._pending_count += 1
                return

            self._finish_pending()
            self.stream.write(self.format(record))
            self.flush()
            self._pending_key = key
            self._pending_count = 1
        except Exception:
            self.handleError(record)

    def _finish_pending(self) -> None:
        if self._pending_key is None:
            return
        if self._pending_count > 1:
            self.stream.write(f" (x{self._pending_count})")
        self.stream.write(self.terminator)
        self.flush()
        self._pending_key = None
        self._pending_count = 0

    def close(self) -> None:
        try:
            self._finish_pending()
        finally:
            super().close()


def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """
    Configure root logging with the repeat-collapsing handler.

    Args:
        level: Log level name (e.g., INFO, DEBUG).
        stream: Optional stream to write logs to; defaults to stderr so
            decoded lines on stdout stay clean.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    handler = RepeatCollapsingHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)
