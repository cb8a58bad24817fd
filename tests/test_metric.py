"""Basis vectors and positions of the grid metrics."""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np
import pytest

from maxol.metric import CartesianMetric, CylindricalMetric

p, q, r = jnp.meshgrid(
    jnp.array([0.0, 1.5, 3.0]), jnp.array([0.0, 2.0]), jnp.array([1.0]), indexing="ij"
)


@pytest.mark.parametrize(
    "metric",
    [
        CartesianMetric(spacing=(2.0, 0.5, 3.0)),
        CylindricalMetric(radius=2.0, d_radius=0.25, d_phi=0.3, d_z=0.5),
    ],
)
def test_contravariant_basis_is_dual(metric):
    cov = metric.covariant_basis(p, q, r)
    contra = metric.contravariant_basis(p, q, r)
    assert cov.shape == contra.shape == (3, 3) + p.shape

    products = jnp.einsum("ia...,ib...->ab...", contra, cov)
    np.testing.assert_allclose(
        products, jnp.broadcast_to(jnp.eye(3)[..., None, None, None], products.shape),
        atol=1e-5,
    )


def test_cylindrical_basis_lengths():
    metric = CylindricalMetric(radius=2.0, d_radius=0.25, d_phi=0.3, d_z=0.5)
    rho = 2.0 + 0.25 * p
    np.testing.assert_allclose(
        metric.covariant_length(p, q, r),
        jnp.stack([jnp.full(p.shape, 0.25), 0.3 * rho, jnp.full(p.shape, 0.5)]),
        rtol=1e-5,
    )
    np.testing.assert_allclose(
        metric.contravariant_length(p, q, r),
        1 / metric.covariant_length(p, q, r),
        rtol=1e-5,
    )


def test_cylindrical_position():
    metric = CylindricalMetric(radius=1.0, d_radius=1.0, d_phi=np.pi / 2, d_z=2.0)
    np.testing.assert_allclose(
        metric.position(1.0, 1.0, 3.0), [0.0, 2.0, 6.0], atol=1e-6
    )


def test_cylindrical_rejects_axis():
    with pytest.raises(ValueError, match=r"radius must be positive"):
        CylindricalMetric(radius=0.0, d_radius=1.0, d_phi=0.1, d_z=1.0)
