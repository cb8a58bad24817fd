"""Writes the initial snapshot of a cylindrical shell to a directory.

    python examples/cylindrical_shell.py OUT_DIR

The electric field points radially outward with unit strength and the magnetic
flux density is axial with unit strength, so that the ``E`` record holds unit
radial vectors and the ``B`` record holds ``(0, 0, 1)`` at every node.
"""

import logging
import sys

import jax.numpy as jnp
import numpy as onp

from maxol.config import ExportConfig
from maxol.metric import CylindricalMetric
from maxol.snapshot import write_snapshot
from maxol.typing import ElectricSamples, MagneticSamples

logging.basicConfig(level=logging.INFO)

# 1. Define the grid: a quarter of a shell between radii 1 and 2.
Np, Nq, Nr = 11, 16, 5
metric = CylindricalMetric(
    radius=1.0, d_radius=1.0 / (Np - 1), d_phi=onp.pi / 2 / (Nq - 1), d_z=0.1
)

# 2. Configure the export, ``MAXOL_OUT_PATH`` is overridden by the argument.
config = ExportConfig.from_env(extents=(Np, Nq, Nr), dt=0.05, out_path=sys.argv[1])

# 3. Staggered samples at the full grid density, as allocated by the solver.
ones, zeros = jnp.ones((Np, Nq, Nr)), jnp.zeros((Np, Nq, Nr))
electric = ElectricSamples(ep=ones, eq=zeros, er=zeros)
magnetic = MagneticSamples(bp=zeros, bq=zeros, br=ones)

# 4. Write the ``E``, ``B`` and ``G`` records of the initial step.
for path in write_snapshot(config, metric, electric, magnetic, step=0):
    print(path)
