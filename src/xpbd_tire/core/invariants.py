# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and health checks.

Used for verifying simulation correctness and debugging stability issues.
Internal constraints move particle pairs with equal and opposite
mass-weighted corrections, so without gravity, damping or contacts the
total linear momentum should stay constant (within floating-point noise).
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import Particle


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Calculate the total kinetic energy of a set of particles.

    T = Σ 0.5 * m * v²

    Pinned particles contribute nothing.
    """
    ke = 0.0
    for p in particles:
        if not p.inv_mass:
            continue
        ke += 0.5 * p.mass * float(np.dot(p.velocity, p.velocity))
    return ke


def linear_momentum(particles: Iterable[Particle]) -> np.ndarray:
    """
    Calculate the total linear momentum of a set of particles.

    P = Σ m * v

    Returns:
        Total momentum vector [Px, Py].
    """
    total = np.zeros(2, dtype=np.float64)
    for p in particles:
        if not p.inv_mass:
            continue
        total += p.mass * p.velocity
    return total


def all_finite(particles: Iterable[Particle]) -> bool:
    """True if every position, previous position and velocity component is finite."""
    return all(
        np.all(np.isfinite(p.position))
        and np.all(np.isfinite(p.prev_position))
        and np.all(np.isfinite(p.velocity))
        for p in particles
    )
