"""Filesystem backends holding lock markers.

Design principles:
- A marker is an empty directory; its existence is the lock.
- ``os.mkdir`` is the test-and-set. It fails with ``FileExistsError``
  when the marker is already present, on POSIX and Windows alike, so no
  separate existence check ever precedes creation.
- Marker creation time comes from the filesystem, never from content
  written by the holder, so a recreated marker is distinguishable.
- Removal, stat and listing failures are expected races and are reported
  as return values rather than raised.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Protocol

from reslock.core.constants import LOCK_STORE_MODE, MARKER_MODE

logger = logging.getLogger(__name__)


class MarkerBackend(Protocol):
    """Minimal filesystem capability the lock algorithm depends on."""

    def ensure_store(self, lock_store: Path) -> bool:
        """Create the lock store if absent. Returns False when it is unusable."""

    def create(self, path: Path) -> int | None:
        """Atomically create a marker. Returns its creation time in ns, or None if it exists."""

    def remove(self, path: Path) -> bool:
        """Remove a marker, best-effort. Returns True when it was removed."""

    def created_ns(self, path: Path) -> int | None:
        """Creation time of an existing marker in ns, or None when absent."""

    def list_markers(self, lock_store: Path) -> Iterator[Path]:
        """Yield marker paths currently in the store."""


class DirectoryMarkerBackend:
    """Markers as directories created with ``os.mkdir``."""

    def __init__(self, *, store_mode: int = LOCK_STORE_MODE, marker_mode: int = MARKER_MODE):
        self.store_mode = store_mode
        self.marker_mode = marker_mode

    def ensure_store(self, lock_store: Path) -> bool:
        try:
            lock_store.mkdir(mode=self.store_mode, parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Cannot create lock store %s: %s", lock_store, e)
            return False
        return True

    def create(self, path: Path) -> int | None:
        try:
            os.mkdir(path, self.marker_mode)
        except FileExistsError:
            return None
        except OSError as e:
            # Missing store, permissions, read-only mount: the attempt simply fails.
            logger.debug("Marker creation failed for %s: %s", path, e)
            return None
        created = self.created_ns(path)
        if created is None:
            # Reclaimed by another contender between mkdir and stat; not ours anymore.
            return None
        return created

    def remove(self, path: Path) -> bool:
        try:
            os.rmdir(path)
        except OSError:
            return False
        return True

    def created_ns(self, path: Path) -> int | None:
        try:
            return os.stat(path).st_ctime_ns
        except OSError:
            return None

    def list_markers(self, lock_store: Path) -> Iterator[Path]:
        try:
            with os.scandir(lock_store) as entries:
                for entry in entries:
                    yield Path(entry.path)
        except OSError as e:
            logger.debug("Cannot list lock store %s: %s", lock_store, e)
