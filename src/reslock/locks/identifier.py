"""Resource name to marker path mapping.

Markers are named by the unsigned CRC-32 of the resource name, written in
decimal. The digest is short and stable across processes and releases,
but it is not collision free: two distinct names with the same checksum
share one marker and therefore block each other. That is the defined
behavior; switching to full names would change the on-disk layout seen by
other cooperating processes.
"""

from __future__ import annotations

import zlib
from pathlib import Path


def identify(resource_name: str) -> str:
    """Return the marker identifier for ``resource_name``.

    Lone surrogates (undecodable bytes from filenames or argv) are encoded
    with ``surrogatepass`` so every ``str`` maps to a marker.
    """
    return str(zlib.crc32(resource_name.encode("utf-8", "surrogatepass")))


def marker_path(lock_store: Path, identifier: str) -> Path:
    return lock_store / identifier
