"""Physical field vectors at grid nodes from staggered curvilinear components.

NOTE: The electric field components are located on the edges of the grid
cells, shifted by a half-cell along their own axis, while the magnetic field
components are located on the faces, shifted by a half-cell along both of the
other axes (see :py:mod:`maxol.typing`). Reconstruction to the nodes therefore
interpolates electric components along one axis and magnetic components across
two.

"""

from __future__ import annotations

from typing import Tuple

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .interpolate import interpolate, interpolate_2d
from .metric import Metric
from .typing import ElectricSamples, Int3, MagneticSamples
from .utils import check_extents, check_samples

# ``(outer, inner)`` staggered axes of the ``p``-, ``q``-, and ``r``-components
# of the magnetic field.
FACE_AXES = ((1, 2), (2, 0), (0, 1))


def node_coordinates(extents: Int3) -> Tuple[jax.Array, jax.Array, jax.Array]:
    """``(p, q, r)`` arrays of shape ``extents`` holding node coordinates."""
    return tuple(
        jnp.meshgrid(*(jnp.arange(n, dtype=float) for n in extents), indexing="ij")
    )


def project(
    basis: ArrayLike, lengths: ArrayLike, components: ArrayLike
) -> jax.Array:
    """``(3, ...)`` Cartesian vectors from ``components`` along ``basis``.

    Each component is first scaled by the inverse length of its basis vector
    before the matrix-vector product with ``basis``.
    """
    return jnp.einsum("ij...,j...->i...", basis, components / lengths)


def electric_field(
    samples: ElectricSamples, metric: Metric, extents: Int3
) -> jax.Array:
    r"""Physical electric field at every node of the grid.

    The covariant components are reconstructed at the nodes along their own
    axis, converted to unphysical components by dividing out the lengths of the
    covariant basis vectors :math:`g_a`, and projected as

    .. math::

        E = \sum_a g_a \, e_a / |g_a|

    Args:
        samples: Edge-centered covariant components.
        metric: Coordinates of the grid.
        extents: ``(pp, qq, rr)`` number of nodes along each axis.

    Returns:
        ``(3, pp, qq, rr)`` ``float32`` array of ``(x, y, z)`` components.

    NOTE: Computation runs at the default JAX precision, ``float32`` unless
    ``jax_enable_x64`` is set, so ``float64`` samples are narrowed on input and
    accuracy degrades for badly conditioned metrics.

    """
    check_samples(extents, electric=samples)
    components = jnp.stack(
        [
            interpolate(values, axis=axis, num=extents[axis])
            for axis, values in enumerate(samples)
        ]
    )
    p, q, r = node_coordinates(extents)
    field = project(
        metric.covariant_basis(p, q, r),
        metric.covariant_length(p, q, r),
        components,
    )
    return field.astype(jnp.float32)


def magnetic_field(
    samples: MagneticSamples, metric: Metric, extents: Int3
) -> jax.Array:
    r"""Physical magnetic flux density at every node of the grid.

    Dual to :py:func:`electric_field`: the contravariant components are
    reconstructed across the two axes perpendicular to their own, scaled by the
    lengths of the contravariant basis vectors :math:`g^a`, and projected as

    .. math::

        B = \sum_a g^a \, b^a / |g^a|

    Args:
        samples: Face-centered contravariant components.
        metric: Coordinates of the grid.
        extents: ``(pp, qq, rr)`` number of nodes along each axis.

    Returns:
        ``(3, pp, qq, rr)`` ``float32`` array of ``(x, y, z)`` components.

    NOTE: Computation runs at the default JAX precision, ``float32`` unless
    ``jax_enable_x64`` is set, so ``float64`` samples are narrowed on input and
    accuracy degrades for badly conditioned metrics.

    """
    check_samples(extents, magnetic=samples)
    components = jnp.stack(
        [
            interpolate_2d(values, axes=axes, nums=tuple(extents[a] for a in axes))
            for values, axes in zip(samples, FACE_AXES)
        ]
    )
    p, q, r = node_coordinates(extents)
    field = project(
        metric.contravariant_basis(p, q, r),
        metric.contravariant_length(p, q, r),
        components,
    )
    return field.astype(jnp.float32)


def node_positions(metric: Metric, extents: Int3) -> jax.Array:
    """``(3, pp, qq, rr)`` ``float32`` array of physical node positions."""
    check_extents(extents)
    return metric.position(*node_coordinates(extents)).astype(jnp.float32)
