"""Binary snapshot records of the physical fields and of the grid geometry.

Each record is a separate file laid out as

* the ``HEADER`` marker (newline-terminated ASCII including its trailing NUL),
* ``int32`` extents ``(pp, qq, rr)``, ``int32`` step, and ``float32`` time,
* three ``float32`` arrays of ``pp * qq * rr`` values for the ``x``, ``y``,
  and ``z`` components, each flattened as ``p + pp * (q + qq * r)``.

Records are named ``<out_path>/<step as 8 digits><suffix>`` with suffix ``E``
for the electric field, ``B`` for the magnetic flux density and ``G`` for the
node positions, which are only written for the initial step ``0``.

Usage:
    config = ExportConfig.from_env(extents=(pp, qq, rr), dt=dt)
    write_snapshot(config, metric, electric, magnetic, step)
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
from typing import Callable, Iterator, List

import jax
import numpy as np

from .config import ExportConfig
from .errors import BufferAllocationError, PathTooLongError, SnapshotError
from .metric import Metric
from .orthonormal import electric_field, magnetic_field, node_positions
from .typing import ElectricSamples, MagneticSamples
from .utils import check_samples, check_step, flatten

logger = logging.getLogger(__name__)

HEADER = b"### Maxol ###\n\x00"

ELECTRIC, MAGNETIC, GEOMETRY = "E", "B", "G"

# Records are never modified once written.
RECORD_MODE = 0o444


def record_path(config: ExportConfig, step: int, suffix: str) -> Path:
    """Path of the ``suffix`` record at ``step``."""
    path = f"{config.out_path}/{step:08d}{suffix}"
    if len(os.fsencode(path)) > config.max_path_length:
        raise PathTooLongError(path, config.max_path_length)
    return Path(path)


def _allocate(size: int) -> np.ndarray:
    return np.empty(size, dtype=np.float32)


@contextlib.contextmanager
def scratch_buffers(size: int) -> Iterator[List[np.ndarray]]:
    """Three ``float32`` buffers of ``size`` values, released on exit."""
    buffers = []
    try:
        for _ in range(3):
            buffers.append(_allocate(size))
    except MemoryError as e:
        raise BufferAllocationError(size) from e
    logger.debug("Allocated 3 x %d float32 scratch buffers", size)

    try:
        yield buffers
    finally:
        buffers.clear()


def _read_only_opener(path: str, flags: int) -> int:
    return os.open(path, flags, RECORD_MODE)


def _write_record(
    path: Path,
    config: ExportConfig,
    step: int,
    time: float,
    buffers: List[np.ndarray],
    compute: Callable[[], jax.Array],
) -> None:
    """Write a single record, with the components filled in by ``compute``.

    The record is created exclusively; an existing file at ``path`` is left
    untouched and fails with ``EEXIST``.
    """
    int32 = np.dtype(f"{config.byte_order}i4")
    float32 = np.dtype(f"{config.byte_order}f4")

    try:
        with open(path, "xb", opener=_read_only_opener) as f:
            f.write(HEADER)
            f.write(np.array(config.extents + (step,), dtype=int32).tobytes())
            f.write(np.array(time, dtype=float32).tobytes())

            for buffer, component in zip(buffers, compute()):
                buffer[:] = flatten(component)
                f.write(buffer.astype(float32, copy=False).tobytes())
    except OSError as e:
        logger.error("Failed to write record %s: %s", path, e)
        raise SnapshotError(e.errno, e.strerror, os.fspath(path)) from e

    logger.info("Wrote %s at step=%d, t=%.4e", path, step, time)


def write_snapshot(
    config: ExportConfig,
    metric: Metric,
    electric: ElectricSamples,
    magnetic: MagneticSamples,
    step: int,
) -> List[Path]:
    """Export the physical fields at ``step`` and, for step ``0``, the grid.

    The electric field record is written first and is stamped with time
    ``step * dt``, followed by the magnetic flux density record stamped with
    ``(step - 1/2) * dt``. At the initial step ``0`` a geometry record of the
    node positions follows (see :py:func:`write_geometry`).

    Transactions are sequential, the first failure aborts the export and is
    raised with its error code in ``errno``. Records written before the failure
    are kept as are partially written records.

    Args:
        config: Export configuration.
        metric: Coordinates of the grid.
        electric: Edge-centered covariant electric field components.
        magnetic: Face-centered contravariant magnetic field components.
        step: Solver step index.

    Returns:
        Paths of the written records.

    Raises:
        ValueError: Sample arrays do not match ``config.extents`` or ``step``
          does not fit a 32-bit integer.
        BufferAllocationError: Scratch buffers could not be allocated.
        PathTooLongError: A record path exceeds ``config.max_path_length``.
        SnapshotError: A record could not be created or written.

    """
    check_step(step)
    check_samples(config.extents, electric, magnetic)

    paths = []
    with scratch_buffers(config.size) as buffers:
        path = record_path(config, step, ELECTRIC)
        _write_record(
            path,
            config,
            step,
            step * config.dt,
            buffers,
            lambda: electric_field(electric, metric, config.extents),
        )
        paths.append(path)

        path = record_path(config, step, MAGNETIC)
        _write_record(
            path,
            config,
            step,
            (step - 0.5) * config.dt,
            buffers,
            lambda: magnetic_field(magnetic, metric, config.extents),
        )
        paths.append(path)

    if step == 0:
        paths.append(write_geometry(config, metric, step))

    return paths


def write_geometry(config: ExportConfig, metric: Metric, step: int = 0) -> Path:
    """Export the physical position of every node, stamped ``step * dt``."""
    check_step(step)
    with scratch_buffers(config.size) as buffers:
        path = record_path(config, step, GEOMETRY)
        _write_record(
            path,
            config,
            step,
            step * config.dt,
            buffers,
            lambda: node_positions(metric, config.extents),
        )
    return path
