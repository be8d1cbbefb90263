# MIT License (see LICENSE)
"""
Core integration helpers.

This subpackage provides:
    - Integrators: predict / reconcile_velocities bracketing the solve.
    - Invariants: kinetic energy, linear momentum and finiteness checks.

Typical usage:
    from xpbd_tire.core import predict, reconcile_velocities

    predict(particles, dt=1/60, gravity=900.0, damping=0.985)
    ...  # relax constraints
    reconcile_velocities(particles, dt=1/60)
"""
from .integrators import predict, reconcile_velocities
from .invariants import kinetic_energy, linear_momentum, all_finite

__all__ = [
    # Integrators
    "predict",
    "reconcile_velocities",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "all_finite",
]
