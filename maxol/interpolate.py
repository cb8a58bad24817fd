"""Reconstruction of node values from half-cell shifted samples.

NOTE: Samples are shifted by a half-cell in the positive direction of each
staggered axis, so that along an axis with ``N`` nodes the ``m`` th sample lies
at ``m + 1/2`` and only the ``N - 1`` samples in ``[0, N - 1)`` lie between
nodes. Arrays allocated at the full density of the grid carry an additional
``N - 1`` th sample beyond the upper node which is never read.

"""

from __future__ import annotations

from typing import Tuple

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike


def interpolate(samples: ArrayLike, axis: int, num: int) -> jax.Array:
    r"""``num`` node values along ``axis`` reconstructed from ``samples``.

    Interior nodes are the average of their two neighboring samples while the
    first and last nodes, which only have neighbors on one side, are linearly
    extrapolated from the two nearest samples

    .. math::

        u_0 &= \tfrac{3}{2} s_0 - \tfrac{1}{2} s_1

        u_i &= \tfrac{1}{2} s_{i - 1} + \tfrac{1}{2} s_i

        u_{N - 1} &= -\tfrac{1}{2} s_{N - 3} + \tfrac{3}{2} s_{N - 2}

    so that the reconstruction is exact for samples that are affine along
    ``axis``. For ``num == 2`` there is only a single sample between the nodes
    and both nodes take its value.

    Args:
        samples: Array with either ``num - 1`` or ``num`` samples along
          ``axis``.
        axis: Axis along which ``samples`` are staggered.
        num: Number of nodes along ``axis``.

    Returns:
        Array of the same shape as ``samples`` except with ``num`` values
        along ``axis``.

    """
    samples = jnp.asarray(samples)
    if num < 2:
        raise ValueError(f"Reconstruction requires at least 2 nodes, got {num}.")
    if samples.shape[axis] not in (num - 1, num):
        raise ValueError(
            f"Expected {num - 1} or {num} samples along axis {axis} but got "
            f"an array of shape {samples.shape}."
        )

    s = jnp.moveaxis(samples, axis, 0)[: num - 1]
    if num == 2:
        nodes = jnp.concatenate([s, s])
    else:
        nodes = jnp.concatenate(
            [
                1.5 * s[:1] - 0.5 * s[1:2],
                0.5 * s[:-1] + 0.5 * s[1:],
                -0.5 * s[-2:-1] + 1.5 * s[-1:],
            ]
        )
    return jnp.moveaxis(nodes, 0, axis)


def interpolate_2d(
    samples: ArrayLike,
    axes: Tuple[int, int],
    nums: Tuple[int, int],
) -> jax.Array:
    """Node values from ``samples`` staggered along both of ``axes``.

    Reconstructs along the inner axis first and then along the outer axis, so
    that extrapolation at the outer boundaries acts on already reconstructed
    inner values. Bilinear in the interior and exact for affine samples
    everywhere, corners included.

    Args:
        samples: Face-centered samples.
        axes: ``(outer, inner)`` axes along which ``samples`` are staggered.
        nums: ``(outer, inner)`` number of nodes along ``axes``.

    """
    (outer, inner), (num_outer, num_inner) = axes, nums
    return interpolate(interpolate(samples, inner, num_inner), outer, num_outer)
