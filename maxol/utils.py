"""Utility functions."""

from __future__ import annotations

import numpy as np
from jax.typing import ArrayLike

from .typing import ElectricSamples, Int3, MagneticSamples


def flatten(component: ArrayLike) -> np.ndarray:
    """``(pp, qq, rr)`` node values flattened as ``p + pp * (q + qq * r)``."""
    return np.asarray(component).ravel(order="F")


def check_extents(extents: Int3):
    if len(extents) != 3 or any(n < 2 for n in extents):
        raise ValueError(
            f"Grid extents must be 3 values of at least 2 nodes each, but got "
            f"{tuple(extents)} instead."
        )


def check_samples(
    extents: Int3,
    electric: ElectricSamples | None = None,
    magnetic: MagneticSamples | None = None,
):
    """Raise ``ValueError`` if sample arrays do not fit a grid of ``extents``.

    Staggered axes may hold either ``n - 1`` or ``n`` samples for ``n`` nodes,
    all other axes must hold exactly ``n``.

    """
    check_extents(extents)

    def allowed(staggered_axes):
        return tuple(
            (n - 1, n) if axis in staggered_axes else (n,)
            for axis, n in enumerate(extents)
        )

    groups = []
    if electric is not None:
        groups.append(("electric", electric, lambda a: (a,)))
    if magnetic is not None:
        groups.append(("magnetic", magnetic, lambda a: tuple({0, 1, 2} - {a})))

    for name, samples, staggered in groups:
        for axis, (label, values) in enumerate(zip(samples._fields, samples)):
            shape = np.shape(values)
            sizes = allowed(staggered(axis))
            if len(shape) != 3 or any(s not in ok for s, ok in zip(shape, sizes)):
                raise ValueError(
                    f"The {name} sample array ``{label}`` must be of shape "
                    f"{' x '.join('|'.join(map(str, ok)) for ok in sizes)} for "
                    f"grid extents of {tuple(extents)}, instead got shape "
                    f"{shape}."
                )


def check_step(step: int):
    """Raise ``ValueError`` if ``step`` does not fit the ``int32`` record field."""
    info = np.iinfo(np.int32)
    if not info.min <= step <= info.max:
        raise ValueError(
            f"Step must be within [{info.min}, {info.max}] to be stored as a "
            f"32-bit integer, but got {step} instead."
        )
