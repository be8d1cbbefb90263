# MIT License (see LICENSE)
"""
Deformable ring ("tire") built from World primitives.

Layout for `count` = N:

    hub      one heavier particle at the center, not constrained to the
             rings; it only provides the reference point for radial and
             tangential directions.
    outer[i] N particles on a circle of radius r_outer (the tread).
    inner[i] N particles on a circle of radius r_inner (the rim), at the
             same angles as outer[i].

Constraints, added to the World in this order:

    outer ring   outer[i] - outer[(i+1) % N]   (tire stiffness)
    inner ring   inner[i] - inner[(i+1) % N]   (rim stiffness)
    spokes       inner[i] - outer[i]            (spoke stiffness)
    pressure     signed area of `outer`

Rest lengths come from the as-built geometry. The ring keeps the three
distance groups and the pressure constraint as back-references for live
tuning; the World owns them.
"""
from __future__ import annotations
import logging
from typing import Iterator

import numpy as np

from .config import RingTuning
from .constants import (
    RING_COUNT,
    RING_OUTER_RADIUS,
    RING_INNER_RADIUS,
    HUB_MASS,
    OUTER_MASS,
    INNER_MASS,
    TIRE_STIFFNESS,
    RIM_STIFFNESS,
    SPOKE_STIFFNESS,
    PRESSURE_STRENGTH,
    AIR_PRESSURE,
    STEER_STRENGTH,
)
from .constraints.solver import DistanceConstraint, PressureConstraint
from .types import Particle
from .util import unit, perp
from .world import World

logger = logging.getLogger(__name__)


class DeformableRing:
    """
    A soft tire: two concentric particle rings joined by spokes, with
    internal pressure on the outer ring.

    Attributes:
        world: The World that owns the particles and constraints.
        hub: Center reference particle.
        outer: Outer ring particles, ordered by angle.
        inner: Inner ring particles, index-aligned with `outer`.
        outer_constraints: Circumferential constraints of the outer ring.
        inner_constraints: Circumferential constraints of the inner ring.
        spoke_constraints: Radial constraints, spoke i joins inner[i] and outer[i].
        pressure: Area constraint over `outer`.
        air_pressure: Outward velocity push per inflate() call.
        steer_strength: Tangential velocity push per unit steer direction.
        mass_scale: Current multiplier on ring particle masses.
    """

    def __init__(
        self,
        world: World,
        cx: float,
        cy: float,
        count: int = RING_COUNT,
        r_outer: float = RING_OUTER_RADIUS,
        r_inner: float = RING_INNER_RADIUS,
        pressure_strength: float = PRESSURE_STRENGTH,
    ) -> None:
        """
        Lay out and wire a ring centered at (cx, cy).

        Raises:
            ValueError: If count < 3, a radius is not positive, or
                r_inner >= r_outer.
        """
        if count < 3:
            raise ValueError(f"A ring needs at least 3 particles per loop, got {count}")
        if r_inner <= 0 or r_outer <= 0:
            raise ValueError(f"Ring radii must be positive, got ({r_outer}, {r_inner})")
        if r_inner >= r_outer:
            raise ValueError(f"Inner radius {r_inner} must be smaller than outer radius {r_outer}")

        self.world = world
        self.air_pressure = AIR_PRESSURE
        self.steer_strength = STEER_STRENGTH
        self.mass_scale = 1.0

        self.hub = world.add_particle(Particle.from_mass(cx, cy, HUB_MASS))
        self.outer: list[Particle] = []
        self.inner: list[Particle] = []

        for i in range(count):
            a = (i / count) * 2.0 * np.pi
            c, s = np.cos(a), np.sin(a)
            self.outer.append(world.add_particle(
                Particle.from_mass(cx + c * r_outer, cy + s * r_outer, OUTER_MASS)
            ))
            self.inner.append(world.add_particle(
                Particle.from_mass(cx + c * r_inner, cy + s * r_inner, INNER_MASS)
            ))

        self.outer_constraints: list[DistanceConstraint] = []
        self.inner_constraints: list[DistanceConstraint] = []
        self.spoke_constraints: list[DistanceConstraint] = []
        self.pressure: PressureConstraint
        self._build(pressure_strength)

        logger.debug(
            "Ring built at (%.1f, %.1f): %d particles, %d constraints",
            cx, cy, 2 * count + 1, 3 * count + 1,
        )

    def _build(self, pressure_strength: float) -> None:
        n = len(self.outer)
        add = self.world.add_constraint

        for i in range(n):
            c = DistanceConstraint.from_current(self.outer[i], self.outer[(i + 1) % n], TIRE_STIFFNESS)
            self.outer_constraints.append(c)
            add(c)

        for i in range(n):
            c = DistanceConstraint.from_current(self.inner[i], self.inner[(i + 1) % n], RIM_STIFFNESS)
            self.inner_constraints.append(c)
            add(c)

        for i in range(n):
            c = DistanceConstraint.from_current(self.inner[i], self.outer[i], SPOKE_STIFFNESS)
            self.spoke_constraints.append(c)
            add(c)

        self.pressure = PressureConstraint(self.outer, pressure_strength)
        add(self.pressure)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self.outer)

    def particles(self) -> Iterator[Particle]:
        """Inner then outer particles (the hub is excluded)."""
        yield from self.inner
        yield from self.outer

    def centroid(self) -> np.ndarray:
        """Mean position of the outer ring."""
        return np.mean([p.position for p in self.outer], axis=0)

    def mean_velocity(self) -> np.ndarray:
        return np.mean([p.velocity for p in self.outer], axis=0)

    def lowest_y(self) -> float:
        """Largest y among outer particles (lowest point on screen)."""
        return max(p.y for p in self.outer)

    def recenter_hub(self) -> None:
        """Move the hub onto the outer centroid, moving with the ring."""
        self.hub.position[:] = self.centroid()
        self.hub.prev_position[:] = self.hub.position
        self.hub.velocity[:] = self.mean_velocity()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def steer(self, direction: float) -> None:
        """
        Spin the ring by pushing outer particles along their tangents.

        The tangent is the hub-to-particle direction rotated by +90°, so a
        positive direction turns the ring clockwise on screen (+y down).
        """
        if not direction:
            return
        self.recenter_hub()

        push = self.steer_strength * direction
        h = self.hub.position
        for p in self.outer:
            t = perp(unit(p.position - h, fallback=1.0))
            p.velocity += t * push

    def inflate(self) -> None:
        """
        Push every outer particle outward by `air_pressure`.

        Called once per step: damping removes most of the previous push, so
        this acts as continuous leak compensation alongside the pressure
        constraint.
        """
        self.recenter_hub()

        h = self.hub.position
        for p in self.outer:
            p.velocity += unit(p.position - h, fallback=1e-4) * self.air_pressure

    def apply_impulse(self, ix: float, iy: float) -> None:
        """Add (ix, iy) to the velocity of every inner and outer particle."""
        for p in self.particles():
            p.velocity[0] += ix
            p.velocity[1] += iy

    def clamp_horizontal_speed(self, max_vx: float) -> None:
        """Cap |vx| of every ring particle at `max_vx`."""
        for p in self.particles():
            p.velocity[0] = min(max(p.velocity[0], -max_vx), max_vx)

    # -------------------------------------------------------------------------
    # Live tuning
    # -------------------------------------------------------------------------

    def set_stiffness(self, tire: float, rim: float, spoke: float) -> None:
        """Set the stiffness of the outer, inner and spoke groups."""
        for c in self.outer_constraints:
            c.stiffness = tire
        for c in self.inner_constraints:
            c.stiffness = rim
        for c in self.spoke_constraints:
            c.stiffness = spoke

    def set_mass_scale(self, scale: float) -> None:
        """
        Rescale ring particle masses without touching geometry.

        Raises:
            ValueError: If scale is not positive.
        """
        if not scale > 0:
            raise ValueError(f"Mass scale must be positive, got {scale}")
        self.mass_scale = scale
        for p in self.outer:
            p.inv_mass = 1.0 / (OUTER_MASS * scale)
        for p in self.inner:
            p.inv_mass = 1.0 / (INNER_MASS * scale)

    def apply_tuning(self, tuning: RingTuning) -> None:
        self.set_stiffness(tuning.tire, tuning.rim, tuning.spoke)
        self.set_mass_scale(tuning.mass_scale)
