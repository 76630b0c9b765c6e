# tests/conftest.py
import logging
from pathlib import Path
import sys

import pytest

# Ensure repository root is on sys.path for imports when running pytest directly.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for path in (str(SRC), str(ROOT)):
    if path not in sys.path:
        sys.path.insert(0, path)

from cmdmanager.history import HistoryTracker  # noqa: E402
from cmdmanager.sinks import ListSink  # noqa: E402


@pytest.fixture
def history() -> HistoryTracker:
    return HistoryTracker()


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """setup_logging() replaces root handlers; put the originals back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
