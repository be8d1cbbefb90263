# MIT License (see LICENSE)
"""
Constraint types for the position-based solver.

This subpackage provides:
    - Constraint: Protocol with the single `solve()` entry point.
    - DistanceConstraint: Keeps two particles at a rest length.
    - PressureConstraint: Keeps the signed area of a particle loop.

Typical usage:
    from xpbd_tire.constraints import DistanceConstraint

    c = DistanceConstraint.from_current(p1, p2, stiffness=0.5)
    world.add_constraint(c)
"""
from .solver import Constraint, DistanceConstraint, PressureConstraint

__all__ = [
    "Constraint",
    "DistanceConstraint",
    "PressureConstraint",
]
