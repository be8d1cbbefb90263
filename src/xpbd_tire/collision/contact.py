# MIT License (see LICENSE)
"""
Contact constraints: particle-particle, particle-box and particle-ground.

Contacts are one-sided position constraints. They share the `solve()`
entry point with the structural constraints and are relaxed in the same
Gauss-Seidel loop, so collision and shape converge together.

- SoftContact: keeps two particles (usually from different rings) at
  least `min_distance` apart. Built fresh every step.
- BoxContact: keeps a particle outside a static rectangle grown by a
  clearance radius, resolving along the nearest edge only.
- GroundContact: keeps a particle above a horizontal ground line.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..constants import DISTANCE_EPS
from ..types import Particle, Rect
from ..util import finite_or_zero


@dataclass(eq=False)
class SoftContact:
    """
    One-sided distance constraint: pushes apart, never pulls together.

    Attributes:
        a: First particle.
        b: Second particle.
        min_distance: Separation below which the contact activates.
        stiffness: Fraction of the overlap removed per solve.
    """
    a: Particle
    b: Particle
    min_distance: float
    stiffness: float

    def solve(self) -> None:
        a, b = self.a, self.b
        d = b.position - a.position
        dist = float(np.hypot(d[0], d[1]))
        if dist >= self.min_distance:
            return
        # Coincident particles have no separating direction.
        if dist < DISTANCE_EPS or not np.isfinite(dist):
            return

        w = a.inv_mass + b.inv_mass
        if w == 0.0:
            return

        C = dist - self.min_distance
        s = self.stiffness * C / w
        corr = finite_or_zero(d * (s / dist))

        if a.inv_mass:
            a.position += corr * a.inv_mass
        if b.inv_mass:
            b.position -= corr * b.inv_mass


# Outward normals of the four rectangle edges, in tie-break order.
_LEFT = np.array([-1.0, 0.0])
_RIGHT = np.array([1.0, 0.0])
_TOP = np.array([0.0, -1.0])
_BOTTOM = np.array([0.0, 1.0])


@dataclass(eq=False)
class BoxContact:
    """
    Keeps a particle outside a static rectangle plus clearance.

    The rectangle is grown by `radius` on every side. A particle inside the
    grown rectangle is moved onto its nearest edge along that edge's
    normal (single axis, never diagonal), and any velocity component
    pointing back into the box is removed.

    Attributes:
        particle: The particle to keep out.
        box: Static rectangle.
        radius: Clearance added around the rectangle.
    """
    particle: Particle
    box: Rect
    radius: float = 0.0

    def penetration(self) -> tuple[float, np.ndarray, int, float] | None:
        """
        Nearest-edge query against the grown rectangle.

        Returns:
            (depth, normal, axis, edge_coordinate) or None if the particle
            lies outside the grown rectangle.
        """
        x1, y1, x2, y2 = self.box.expanded(self.radius)
        px, py = self.particle.x, self.particle.y

        # Expanded AABB early-out
        if px < x1 or px > x2 or py < y1 or py > y2:
            return None

        candidates = (
            (px - x1, _LEFT, 0, x1),
            (x2 - px, _RIGHT, 0, x2),
            (py - y1, _TOP, 1, y1),
            (y2 - py, _BOTTOM, 1, y2),
        )
        # min() keeps the first of equal distances: left, right, top, bottom.
        return min(candidates, key=lambda c: c[0])

    def solve(self) -> None:
        p = self.particle
        if not p.inv_mass:
            return

        hit = self.penetration()
        if hit is None:
            return
        depth, normal, axis, edge = hit
        if depth <= 0.0:
            return

        p.position[axis] = edge
        vn = float(p.velocity[axis] * normal[axis])
        if vn < 0.0:
            p.velocity[axis] = 0.0


@dataclass(eq=False)
class GroundContact:
    """
    Keeps a particle at or above a horizontal ground line.

    With +y pointing down the allowed region is y <= ground_y - clearance.

    Attributes:
        particle: The particle to support.
        ground_y: Ground line.
        clearance: Padding kept between the particle and the line.
    """
    particle: Particle
    ground_y: float
    clearance: float = 0.0

    @property
    def limit(self) -> float:
        return self.ground_y - self.clearance

    def solve(self) -> None:
        p = self.particle
        if not p.inv_mass:
            return
        lim = self.limit
        if p.position[1] > lim:
            p.position[1] = lim
            if p.velocity[1] > 0.0:
                p.velocity[1] = 0.0
