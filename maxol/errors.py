"""Exceptions raised while exporting snapshots.

Every exception carries the POSIX error code of the failure in ``errno`` so
that callers may decide to retry, abort the run, or skip the snapshot.

"""

from __future__ import annotations

import errno
import os


class SnapshotError(OSError):
    """Snapshot transaction failed; ``errno`` holds the underlying code."""


class BufferAllocationError(SnapshotError, MemoryError):
    """Scratch buffers for the field components could not be allocated."""

    def __init__(self, size: int):
        super().__init__(
            errno.ENOMEM,
            f"{os.strerror(errno.ENOMEM)}: 3 x {size} float32 scratch buffers",
        )


class PathTooLongError(SnapshotError):
    """Formatted record path exceeds the configured maximum length."""

    def __init__(self, path: str, limit: int):
        super().__init__(
            errno.ENAMETOOLONG,
            f"{os.strerror(errno.ENAMETOOLONG)} (limit of {limit} bytes)",
            path,
        )
