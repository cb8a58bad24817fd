"""Basic types."""

from __future__ import annotations

from typing import NamedTuple, Tuple

from jax.typing import ArrayLike

# NOTE: Please avoid including logic here! Included types should be trivially simple.

# Tuple of 3 integers, used for ``(p, q, r)`` data.
Int3 = Tuple[int, int, int]


class ElectricSamples(NamedTuple):
    """Covariant electric-field components as produced by the solver.

    Each component is shifted by a half-cell along its own axis (edge-centered),
    so that ``ep[m, j, k]`` is located at ``(m + 1/2, j, k)`` and likewise for
    ``eq`` and ``er``.

    Args:
        ep: ``(pp - 1 | pp, qq, rr)`` array of ``p``-components.
        eq: ``(pp, qq - 1 | qq, rr)`` array of ``q``-components.
        er: ``(pp, qq, rr - 1 | rr)`` array of ``r``-components.

    """

    ep: ArrayLike
    eq: ArrayLike
    er: ArrayLike


class MagneticSamples(NamedTuple):
    """Contravariant magnetic-field components as produced by the solver.

    Each component is shifted by a half-cell along both axes perpendicular to
    its own axis (face-centered), so that ``bp[i, m, n]`` is located at
    ``(i, m + 1/2, n + 1/2)`` and likewise for ``bq`` and ``br``.

    Args:
        bp: ``(pp, qq - 1 | qq, rr - 1 | rr)`` array of ``p``-components.
        bq: ``(pp - 1 | pp, qq, rr - 1 | rr)`` array of ``q``-components.
        br: ``(pp - 1 | pp, qq - 1 | qq, rr)`` array of ``r``-components.

    """

    bp: ArrayLike
    bq: ArrayLike
    br: ArrayLike
