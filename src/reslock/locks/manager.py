"""Advisory resource locks coordinated through marker directories.

``ResLock`` locks a named resource (a file, a table, any name the
cooperating processes agree on verbatim) by creating an empty directory
in a shared lock store. Directory creation is atomic and fails when the
directory exists, so one call both tests and claims the lock.

Usage::

    with ResLock() as reslock:
        handle = reslock.lock("contentious.file")
        if handle is None:
            raise RuntimeError("Unable to lock the resource")
        update_the_file()
        reslock.unlock(handle)

The lock is not fair: waiters poll with a randomized pause and no queue
exists, so a newcomer may win before an earlier waiter retries. All
participants must share one filesystem and wall clock.
"""

from __future__ import annotations

import logging
import os
import random
import threading
import time
import weakref
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from reslock.core.config import LockConfig
from reslock.core.constants import default_lock_store
from reslock.core.exceptions import LockTimeoutError
from reslock.core.logging import with_log_context
from reslock.locks.backends import DirectoryMarkerBackend, MarkerBackend
from reslock.locks.identifier import identify, marker_path


@dataclass(frozen=True)
class LockHandle:
    """Proof of a successful acquisition.

    Binds the marker to the creation time observed when it was created, so
    release can tell our marker apart from one that was reclaimed as stale
    and recreated by another process.
    """

    identifier: str
    resource_name: str
    path: Path
    created_ns: int


def _normalize_store(locks_path: str | os.PathLike[str] | None) -> Path:
    if locks_path is None:
        return Path(default_lock_store())
    return Path(os.path.expanduser(os.fspath(locks_path).strip()))


def _release_marker(
    backend: MarkerBackend, handle: LockHandle, log: logging.Logger | logging.LoggerAdapter
) -> bool:
    current = backend.created_ns(handle.path)
    if current is None:
        log.debug("Marker for '%s' already gone", handle.resource_name)
        return False
    if current != handle.created_ns:
        log.debug("Marker for '%s' was recreated by another holder; leaving it", handle.resource_name)
        return False
    removed = backend.remove(handle.path)
    if removed:
        log.debug("Released '%s' (%s)", handle.resource_name, handle.identifier)
    return removed


def _release_all(
    backend: MarkerBackend,
    held: dict[str, LockHandle],
    state_lock: threading.RLock,
    log: logging.Logger | logging.LoggerAdapter,
) -> None:
    with state_lock:
        handles = list(held.values())
        held.clear()
    for handle in handles:
        _release_marker(backend, handle, log)


class ResLock:
    """Cross-process advisory lock manager for named resources.

    Every handle issued by an instance is released when the instance is
    closed (explicitly, via ``with``, or as a last resort when it is
    garbage collected or the interpreter exits). A crashed holder is
    recovered from by the stale-marker reclamation instead.
    """

    def __init__(
        self,
        locks_path: str | os.PathLike[str] | None = None,
        *,
        config: LockConfig | None = None,
        backend: MarkerBackend | None = None,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
        rng: random.Random | None = None,
    ):
        self.lock_store = _normalize_store(locks_path)
        self.config = (config or LockConfig()).validate()
        self.backend: MarkerBackend = backend or DirectoryMarkerBackend()
        self.logger = with_log_context(logger or logging.getLogger(__name__), lock_store=str(self.lock_store))

        # Marker age is measured against wall-clock time, like the filesystem timestamps.
        self._clock = clock
        self._sleep = sleep
        self._rng = rng or random.Random()

        self._held: dict[str, LockHandle] = {}
        self._state_lock = threading.RLock()

        self.backend.ensure_store(self.lock_store)
        self._finalizer = weakref.finalize(self, _release_all, self.backend, self._held, self._state_lock, self.logger)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.lock_store)!r}, held={len(self._held)})"

    def __enter__(self) -> ResLock:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def held(self) -> tuple[LockHandle, ...]:
        with self._state_lock:
            return tuple(self._held.values())

    def path_for(self, resource_name: str) -> Path:
        return marker_path(self.lock_store, identify(resource_name))

    def lock(
        self,
        resource_name: str,
        *,
        max_pause: float | None = None,
        max_attempts: int | None = None,
        max_hold_seconds: float | None = None,
    ) -> LockHandle | None:
        """Attempt to lock ``resource_name``.

        Retries with a random pause in ``[max_pause / 10, max_pause]`` until
        ``max_pause * max_attempts`` seconds of pauses have been spent.
        Markers at least ``max_hold_seconds`` old are reclaimed on the way.

        Returns:
            A ``LockHandle`` on success, ``None`` when the budget runs out.
        """
        config = self.config.with_overrides(
            max_pause=max_pause, max_attempts=max_attempts, max_hold_seconds=max_hold_seconds
        )
        identifier = identify(resource_name)
        path = marker_path(self.lock_store, identifier)

        remaining = config.timeout_budget
        maintenance_done = False

        while True:
            self._reclaim_if_stale(path, config.max_hold_seconds)

            created_ns = self.backend.create(path)
            if created_ns is not None:
                handle = LockHandle(
                    identifier=identifier,
                    resource_name=resource_name,
                    path=path,
                    created_ns=created_ns,
                )
                with self._state_lock:
                    self._held[identifier] = handle
                self.logger.debug("Locked '%s' (%s)", resource_name, identifier)
                return handle

            # Random pauses keep competing waiters from retrying in lockstep.
            pause = self._rng.uniform(config.min_pause, config.max_pause)
            self._sleep(pause)

            if not maintenance_done:
                self.logger.debug(
                    "'%s' is locked; retrying for up to %.3fs", resource_name, config.timeout_budget
                )
                self._sweep(config.max_hold_seconds)
                maintenance_done = True

            remaining -= pause
            if remaining <= 0:
                break

        self.logger.info("Could not lock '%s' within %.3fs", resource_name, config.timeout_budget)
        return None

    def unlock(self, handle: LockHandle | None) -> None:
        """Release a handle returned by ``lock``.

        Unknown, foreign or already released handles are ignored. The marker
        is only removed while it still carries the creation time recorded in
        the handle.
        """
        if not isinstance(handle, LockHandle):
            return
        with self._state_lock:
            if self._held.get(handle.identifier) != handle:
                return
            del self._held[handle.identifier]
        _release_marker(self.backend, handle, self.logger)

    def close(self) -> None:
        """Release every handle this instance still tracks."""
        _release_all(self.backend, self._held, self._state_lock, self.logger)

    def sweep(self) -> int:
        """Remove every stale marker in the lock store.

        Best-effort maintenance that never raises. Returns how many markers
        this call removed.
        """
        return self._sweep(self.config.max_hold_seconds)

    @contextmanager
    def hold(
        self,
        resource_name: str,
        *,
        max_pause: float | None = None,
        max_attempts: int | None = None,
        max_hold_seconds: float | None = None,
    ) -> Iterator[LockHandle]:
        """Lock ``resource_name`` for the duration of a ``with`` block.

        Raises:
            LockTimeoutError: If the lock could not be acquired in time
        """
        handle = self.lock(
            resource_name, max_pause=max_pause, max_attempts=max_attempts, max_hold_seconds=max_hold_seconds
        )
        if handle is None:
            budget = self.config.with_overrides(max_pause=max_pause, max_attempts=max_attempts).timeout_budget
            raise LockTimeoutError(resource_name, budget)
        try:
            yield handle
        finally:
            self.unlock(handle)

    def is_locked(self, resource_name: str) -> bool:
        """Whether a marker currently exists for ``resource_name``. Diagnostic only."""
        return self.backend.created_ns(self.path_for(resource_name)) is not None

    def marker_age(self, resource_name: str) -> float | None:
        created_ns = self.backend.created_ns(self.path_for(resource_name))
        if created_ns is None:
            return None
        return self._age(created_ns)

    def _age(self, created_ns: int) -> float:
        return self._clock() - created_ns / 1_000_000_000

    def _reclaim_if_stale(self, path: Path, max_hold_seconds: float) -> bool:
        created_ns = self.backend.created_ns(path)
        if created_ns is None:
            return False
        age = self._age(created_ns)
        if age < max_hold_seconds:
            return False
        # Another contender may remove it first; that is fine.
        if not self.backend.remove(path):
            return False
        self.logger.debug("Reclaimed stale marker %s (age %.3fs)", path.name, age)
        return True

    def _sweep(self, max_hold_seconds: float) -> int:
        removed = 0
        try:
            for path in self.backend.list_markers(self.lock_store):
                if self._reclaim_if_stale(path, max_hold_seconds):
                    removed += 1
        except OSError as e:
            self.logger.debug("Lock store sweep interrupted: %s", e)
        if removed:
            self.logger.debug("Sweep removed %d stale marker(s)", removed)
        return removed
