"""Locking subsystem for cross-process coordination.

Markers are directories in a shared lock store; ``ResLock`` drives
acquisition, stale-marker reclamation and ownership-checked release on
top of a ``MarkerBackend``.
"""

from reslock.locks.backends import DirectoryMarkerBackend, MarkerBackend
from reslock.locks.identifier import identify, marker_path
from reslock.locks.manager import LockHandle, ResLock

__all__ = [
    "DirectoryMarkerBackend",
    "LockHandle",
    "MarkerBackend",
    "ResLock",
    "identify",
    "marker_path",
]
