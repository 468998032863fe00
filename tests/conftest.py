"""Pytest configuration and fixtures for reslock tests"""
import logging
from logging.handlers import RotatingFileHandler
from collections.abc import Iterator
from pathlib import Path

import pytest

from reslock.core.config import LockConfig


class FakeMarkerBackend:
    """In-memory marker store with a controllable creation clock (ns)."""

    def __init__(self, now_ns: int = 1_000_000_000 * 1_000_000_000):
        self.now_ns = now_ns
        self.markers: dict[Path, int] = {}
        self.create_calls = 0
        self.list_calls = 0
        self.removed: list[Path] = []
        self.fail_remove = False

    def ensure_store(self, lock_store: Path) -> bool:
        return True

    def create(self, path: Path) -> int | None:
        self.create_calls += 1
        if path in self.markers:
            return None
        self.markers[path] = self.now_ns
        return self.now_ns

    def remove(self, path: Path) -> bool:
        if self.fail_remove or path not in self.markers:
            return False
        del self.markers[path]
        self.removed.append(path)
        return True

    def created_ns(self, path: Path) -> int | None:
        return self.markers.get(path)

    def list_markers(self, lock_store: Path) -> Iterator[Path]:
        self.list_calls += 1
        yield from [path for path in self.markers if path.parent == lock_store]


class RecordingSleep:
    """Stand-in for time.sleep that records pauses instead of sleeping."""

    def __init__(self):
        self.pauses: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.pauses.append(seconds)


@pytest.fixture
def lock_store(tmp_path: Path) -> Path:
    """Path of a lock store that does not exist yet"""
    return tmp_path / "locks"


@pytest.fixture
def fake_backend() -> FakeMarkerBackend:
    return FakeMarkerBackend()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fast_config() -> LockConfig:
    """Short budget so contended acquisitions give up quickly"""
    return LockConfig(max_pause=0.01, max_attempts=5, max_hold_seconds=60)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """setup_logging installs root handlers; drop them after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)
