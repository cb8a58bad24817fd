"""Coordinate metrics of the curvilinear simulation grid.

A metric maps the continuous curvilinear coordinate ``(p, q, r)`` of the grid,
where integer values correspond to grid nodes, to physical ``(x, y, z)``
positions and supplies the local basis vectors of that mapping.

All quantities are returned as arrays whose leading axes index components and
whose trailing axes follow the (broadcast) shape of ``p``, ``q``, and ``r``.
Basis arrays are indexed as ``[cartesian_axis, curvilinear_axis]`` so that the
columns are the basis vectors.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike


class Metric(ABC):
    """Pure, stateless description of the grid coordinates.

    Subclasses implement :py:meth:`covariant_basis` and :py:meth:`position`;
    the dual basis and the basis lengths are derived from these unless
    overridden.

    """

    @abstractmethod
    def covariant_basis(self, p: ArrayLike, q: ArrayLike, r: ArrayLike) -> jax.Array:
        """``(3, 3, ...)`` array of tangent vectors ``d(x, y, z) / d(p, q, r)``."""

    @abstractmethod
    def position(self, p: ArrayLike, q: ArrayLike, r: ArrayLike) -> jax.Array:
        """``(3, ...)`` array of physical ``(x, y, z)`` positions."""

    def contravariant_basis(
        self, p: ArrayLike, q: ArrayLike, r: ArrayLike
    ) -> jax.Array:
        """``(3, 3, ...)`` array of the dual basis vectors.

        The ``a`` th contravariant vector is orthogonal to every covariant
        vector except the ``a`` th one, with which its dot product is ``1``.

        """
        basis = jnp.moveaxis(self.covariant_basis(p, q, r), (0, 1), (-2, -1))
        dual = jnp.swapaxes(jnp.linalg.inv(basis), -1, -2)
        return jnp.moveaxis(dual, (-2, -1), (0, 1))

    def covariant_length(self, p: ArrayLike, q: ArrayLike, r: ArrayLike) -> jax.Array:
        """``(3, ...)`` array of covariant basis vector lengths."""
        return jnp.linalg.norm(self.covariant_basis(p, q, r), axis=0)

    def contravariant_length(
        self, p: ArrayLike, q: ArrayLike, r: ArrayLike
    ) -> jax.Array:
        """``(3, ...)`` array of contravariant basis vector lengths."""
        return jnp.linalg.norm(self.contravariant_basis(p, q, r), axis=0)


@dataclass(frozen=True)
class CartesianMetric(Metric):
    """Axis-aligned grid with uniform ``spacing`` starting at ``origin``.

    With the default unit spacing the curvilinear and physical coordinates
    coincide.

    Args:
        spacing: ``(dx, dy, dz)`` physical distance between adjacent nodes.
        origin: Physical position of the ``(0, 0, 0)`` node.

    """

    spacing: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    origin: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    def covariant_basis(self, p, q, r):
        p, _, _ = jnp.broadcast_arrays(p, q, r)
        diag = jnp.diag(jnp.asarray(self.spacing, dtype=float))
        return jnp.broadcast_to(
            jnp.expand_dims(diag, range(2, 2 + p.ndim)), (3, 3) + p.shape
        )

    def position(self, p, q, r):
        coords = jnp.stack(jnp.broadcast_arrays(p, q, r))
        trailing = range(1, coords.ndim)
        spacing = jnp.expand_dims(jnp.asarray(self.spacing, dtype=float), trailing)
        origin = jnp.expand_dims(jnp.asarray(self.origin, dtype=float), trailing)
        return origin + spacing * coords


@dataclass(frozen=True)
class CylindricalMetric(Metric):
    """Cylindrical shell with ``p`` radial, ``q`` azimuthal, ``r`` axial.

    The node at ``(p, q, r)`` is located at radius ``radius + p * d_radius``,
    azimuthal angle ``q * d_phi`` and height ``r * d_z``.

    Args:
        radius: Radius of the innermost shell, must be positive.
        d_radius: Radial spacing between nodes.
        d_phi: Angular spacing between nodes, in radians.
        d_z: Axial spacing between nodes.

    """

    radius: float
    d_radius: float
    d_phi: float
    d_z: float

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(
                f"Innermost radius must be positive to avoid a singular "
                f"basis on the axis, got {self.radius}."
            )

    def covariant_basis(self, p, q, r):
        p, q, r = jnp.broadcast_arrays(p, q, r)
        rho = self.radius + p * self.d_radius
        cos, sin = jnp.cos(q * self.d_phi), jnp.sin(q * self.d_phi)
        zero = jnp.zeros_like(rho)
        return jnp.stack(
            [
                jnp.stack([self.d_radius * cos, -rho * self.d_phi * sin, zero]),
                jnp.stack([self.d_radius * sin, rho * self.d_phi * cos, zero]),
                jnp.stack([zero, zero, zero + self.d_z]),
            ]
        )

    def position(self, p, q, r):
        p, q, r = jnp.broadcast_arrays(p, q, r)
        rho = self.radius + p * self.d_radius
        phi = q * self.d_phi
        return jnp.stack([rho * jnp.cos(phi), rho * jnp.sin(phi), r * self.d_z])
