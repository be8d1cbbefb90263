# MIT License (see LICENSE)
"""
Position-based constraints for soft ring bodies.

Every constraint exposes a single `solve()` that reads the current particle
positions and writes a position correction directly (XPBD-style). Velocity
is never touched here: World.step() derives it afterwards from the total
position change, which folds the constraint impulses into the velocity.

Key concepts:
- Stiffness in [0, 1] scales how much of the detected error is removed per
  solve. 0 is inert, 1 removes it fully in one call.
- Corrections are weighted by inverse mass, so pinned particles
  (inv_mass == 0) never move.
- Degenerate geometry (coincident particles, zero-area loops) skips the
  correction instead of raising; non-finite displacements are zeroed.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from ..constants import DISTANCE_EPS, PRESSURE_RELAXATION_LIMIT
from ..types import Particle
from ..util import finite_or_zero, polygon_area


class Constraint(Protocol):
    """Anything the World can relax: one side-effecting `solve()` call."""

    def solve(self) -> None:
        ...


@dataclass(eq=False)
class DistanceConstraint:
    """
    Keeps two particles at a fixed separation.

    Attributes:
        a: First particle.
        b: Second particle.
        rest_length: Target separation, fixed at construction.
        stiffness: Fraction of the error corrected per solve, in [0, 1].
            Mutable at runtime for live tuning.
    """
    a: Particle
    b: Particle
    rest_length: float
    stiffness: float = 1.0

    @classmethod
    def from_current(cls, a: Particle, b: Particle, stiffness: float = 1.0) -> "DistanceConstraint":
        """Create a constraint whose rest length is the particles' current separation."""
        rest = float(np.hypot(*(b.position - a.position)))
        return cls(a=a, b=b, rest_length=rest, stiffness=stiffness)

    def current_length(self) -> float:
        return float(np.hypot(*(self.b.position - self.a.position)))

    def solve(self) -> None:
        a, b = self.a, self.b
        d = b.position - a.position
        dist = float(np.hypot(d[0], d[1]))
        if dist < DISTANCE_EPS or not np.isfinite(dist):
            return

        # Constraint error: C = current_distance - rest_length
        C = dist - self.rest_length
        w = a.inv_mass + b.inv_mass
        if w == 0.0:
            return

        s = self.stiffness * C / w
        corr = finite_or_zero(d * (s / dist))

        if a.inv_mass:
            a.position += corr * a.inv_mass
        if b.inv_mass:
            b.position -= corr * b.inv_mass


@dataclass(eq=False)
class PressureConstraint:
    """
    Resists change of the signed area enclosed by a particle loop.

    Models internal gas pressure: a squashed ring is pushed back out, an
    over-expanded one is pulled in. The rest area is captured on the first
    solve (the `ready` transition) from whatever configuration exists then,
    and that call applies no correction.

    For a shoelace area the gradient with respect to vertex i only depends
    on its neighbours:
        dA/dx_i = 0.5 * (y_{i+1} - y_{i-1})
        dA/dy_i = 0.5 * (x_{i-1} - x_{i+1})
    Each movable vertex is displaced by -grad_i * C * w_i with
    C = (A - rest_area) * strength.

    With S = sum(w_i |grad_i|^2), one solve scales the linearised area error
    by (1 - strength * S). Strengths up to 1 / S undershoot, up to 2 / S
    overshoot but still shrink the error, and beyond 2 / S it grows every
    solve. The effective strength is therefore capped at
    PRESSURE_RELAXATION_LIMIT / S; stable strengths pass through unchanged.
    Rings with few vertices (large |grad_i|) are the ones that hit the cap.

    Attributes:
        points: Ordered boundary particles, consistently wound.
        strength: Correction scale per unit area error.
        rest_area: Captured target area (valid once `ready` is True).
        ready: Whether the rest area has been captured.
    """
    points: list[Particle]
    strength: float
    rest_area: float = 0.0
    ready: bool = False
    last_area: float = field(default=0.0, repr=False)

    def positions(self) -> np.ndarray:
        return np.array([p.position for p in self.points], dtype=np.float64)

    def area(self) -> float:
        """Current signed area of the loop."""
        return polygon_area(self.positions())

    def solve(self) -> None:
        pts = self.positions()
        A = polygon_area(pts)
        self.last_area = A

        if not self.ready:
            self.ready = True
            self.rest_area = A
            return

        if not np.isfinite(A):
            return

        prev = np.roll(pts, 1, axis=0)
        nxt = np.roll(pts, -1, axis=0)
        grad = np.empty_like(pts)
        grad[:, 0] = 0.5 * (nxt[:, 1] - prev[:, 1])
        grad[:, 1] = 0.5 * (prev[:, 0] - nxt[:, 0])

        w = np.array([p.inv_mass for p in self.points], dtype=np.float64)
        denom = float(np.sum(w * np.sum(grad * grad, axis=1)))
        if denom < 1e-12 or not np.isfinite(denom):
            return

        k = min(self.strength, PRESSURE_RELAXATION_LIMIT / denom)
        C = (A - self.rest_area) * k
        disp = finite_or_zero(grad * (C * w)[:, None])

        for p, dp in zip(self.points, disp):
            if p.inv_mass:
                p.position -= dp
