# history.py
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Iterable, Iterator, List

from .model import HISTORY_CAPACITY


class HistoryTracker:
    """
    Most-recent-first record of recognized opcodes, bounded to HISTORY_CAPACITY.

    Inserts go to the front; once the record is over capacity the oldest
    (rearmost) entry is dropped. Iteration walks a snapshot, so a query never
    sees a half-applied insert.
    """

    capacity = HISTORY_CAPACITY

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: Deque[str] = deque()
        self._lock = threading.Lock()
        # Oldest first so the first given entry ends up most recent.
        for opcode in reversed(list(entries)):
            self.insert(opcode)

    def insert(self, opcode: str) -> None:
        """
        Prepend an opcode, evicting the oldest entry on overflow.

        Args:
            opcode: Opcode text to record.
        """
        with self._lock:
            self._entries.appendleft(opcode)
            if len(self._entries) > self.capacity:
                self._entries.pop()

    def snapshot(self) -> List[str]:
        """Return a copy of the record, most recent first."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"HistoryTracker({self.snapshot()!r})"
