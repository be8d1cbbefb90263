# MIT License (see LICENSE)
"""
Core type definitions for the 2D position-based simulation.

Defines the fundamental data structures:
- Particle: a point mass with current/previous position, velocity and
  inverse mass. The solver works on particles only; there are no rigid
  bodies and no rotational state.
- Rect: a static axis-aligned rectangle used for box contacts.

Coordinates follow screen convention: +x right, +y down, so positive
gravity pulls particles toward larger y.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64


# =============================================================================
# Static geometry
# =============================================================================

@dataclass(frozen=True)
class Rect:
    """
    Static axis-aligned rectangle.

    Attributes:
        x: Left edge.
        y: Top edge.
        w: Width (extends toward +x).
        h: Height (extends toward +y, i.e. downward on screen).
    """
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def expanded(self, radius: float) -> tuple[float, float, float, float]:
        """Return (x1, y1, x2, y2) grown by `radius` on every side."""
        return (self.x - radius, self.y - radius, self.right + radius, self.bottom + radius)


# =============================================================================
# Particle
# =============================================================================

@dataclass
class Particle:
    """
    A point mass integrated by the position-based solver.

    `velocity` is only authoritative between steps: impulses and steering
    write to it, then World.step() overwrites it with
    (position - prev_position) / dt after the constraint solve.

    Attributes:
        position: Current position [x, y].
        inv_mass: Inverse mass. 0 pins the particle in place.
        velocity: Velocity [vx, vy].
        prev_position: Position at the start of the current step.
        id: Index assigned by World.add_particle().
    """
    position: np.ndarray | tuple[float, float]
    inv_mass: float = 1.0
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    prev_position: np.ndarray | None = field(default=None)
    id: int = -1

    def __post_init__(self) -> None:
        """Convert vectors to float64 arrays; previous position starts at position."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        if self.prev_position is None:
            self.prev_position = self.position.copy()
        else:
            self.prev_position = f64(self.prev_position)

    @classmethod
    def from_mass(cls, x: float, y: float, mass: float) -> "Particle":
        """Create a particle at rest from a mass. mass <= 0 gives a pinned particle."""
        return cls(position=(x, y), inv_mass=1.0 / mass if mass > 0 else 0.0)

    @property
    def mass(self) -> float:
        """Mass (1/inv_mass). Returns 0 for pinned particles."""
        return 0.0 if self.inv_mass <= 0 else 1.0 / self.inv_mass

    @property
    def pinned(self) -> bool:
        return self.inv_mass == 0.0

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def vx(self) -> float:
        return float(self.velocity[0])

    @property
    def vy(self) -> float:
        return float(self.velocity[1])
