# MIT License (see LICENSE)
"""
Prediction and velocity reconciliation for position-based dynamics.

A step brackets the constraint solve with two passes over the particles:

    predict:    x_prev = x
                v.y   += g dt            (movable particles only)
                v     *= damping
                x     += v dt
    reconcile:  v = (x - x_prev) / dt

Velocity is therefore derived from the solver's position change rather
than integrated independently; whatever the constraints did to a particle's
position shows up in its velocity for the next step.

Reference:
    Müller et al., "Position Based Dynamics" (2007), Algorithm 1.
"""
from __future__ import annotations
from typing import Iterable

from ..types import Particle
from ..util import finite_or_zero


def predict(particles: Iterable[Particle], dt: float, gravity: float, damping: float) -> None:
    """
    Save previous positions and advance movable particles by their velocity.

    Pinned particles (inv_mass == 0) keep their position and velocity; their
    previous position is still refreshed so their derived velocity stays zero.

    Args:
        particles: Particles to advance (modified in-place).
        dt: Timestep in seconds.
        gravity: Downward (+y) acceleration.
        damping: Velocity multiplier applied after gravity.
    """
    for p in particles:
        p.prev_position[:] = p.position
        if not p.inv_mass:
            continue
        p.velocity[1] += gravity * dt
        p.velocity *= damping
        p.position += finite_or_zero(p.velocity * dt)


def reconcile_velocities(particles: Iterable[Particle], dt: float) -> None:
    """Set each particle's velocity to its position change over the step."""
    inv_dt = 1.0 / dt
    for p in particles:
        p.velocity[:] = finite_or_zero((p.position - p.prev_position) * inv_dt)
