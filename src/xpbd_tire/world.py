# MIT License (see LICENSE)
"""
The simulation world and its fixed-timestep loop.

World owns every particle and constraint. One call to step():
    1. Predict: save previous positions, apply gravity and damping,
       advance positions by velocity.
    2. Relax: `iterations` Gauss-Seidel passes. Each pass solves every
       persistent constraint in insertion order, then every transient
       contact in insertion order. Later constraints see the corrections
       of earlier ones within the same pass.
    3. Reconcile: velocity = (position - previous position) / dt.
    4. Increment the step counter.

Insertion order is solve order and is never reshuffled, so a given setup
always produces the same trajectory.

Structure:
    - Create a World from a SolverConfig.
    - Add particles and persistent constraints (directly or via a
      DeformableRing).
    - Per step, optionally clear and refill transient contacts.
    - Call world.step() in a loop.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

from .config import SolverConfig, DEFAULT_CONFIG
from .constraints.solver import Constraint
from .core.integrators import predict, reconcile_velocities
from .profiler import Profiler
from .types import Particle

logger = logging.getLogger(__name__)


@dataclass
class World:
    """
    Particle / constraint container and position-based solver.

    Attributes:
        config: Fixed solver parameters (timestep, gravity, iterations, damping).
        profiler: Optional Profiler timing the step phases.
        particles: All particles, in insertion order.
        constraints: Persistent constraints; insertion order is solve order.
        contacts: Transient contacts, rebuilt by the driver every step.
        tick: Number of completed steps.
    """
    config: SolverConfig = DEFAULT_CONFIG
    profiler: Profiler | None = None

    # Internal state
    particles: list[Particle] = field(default_factory=list)
    constraints: list[Constraint] = field(default_factory=list)
    contacts: list[Constraint] = field(default_factory=list)
    tick: int = 0

    def __post_init__(self) -> None:
        logger.debug(
            "World created: dt=%.5f gravity=%.1f iterations=%d damping=%.4f",
            self.config.dt, self.config.gravity, self.config.iterations, self.config.damping,
        )

    @property
    def time(self) -> float:
        """Simulated time in seconds."""
        return self.tick * self.config.dt

    def add_particle(self, particle: Particle) -> Particle:
        """
        Add a particle to the simulation.

        Assigns the particle's id (its index in `particles`).

        Returns:
            The same particle, for chaining.
        """
        particle.id = len(self.particles)
        self.particles.append(particle)
        return particle

    def add_constraint(self, constraint: Constraint) -> Constraint:
        """Append a persistent constraint. It is solved after all earlier ones."""
        self.constraints.append(constraint)
        return constraint

    def add_transient_contact(self, contact: Constraint) -> Constraint:
        """Append a contact that lives until the next clear_transient_contacts()."""
        self.contacts.append(contact)
        return contact

    def clear_transient_contacts(self) -> int:
        """
        Drop every transient contact.

        Persistent constraints are untouched.

        Returns:
            Number of contacts removed.
        """
        n = len(self.contacts)
        self.contacts.clear()
        return n

    def _relax(self) -> None:
        constraints = self.constraints
        contacts = self.contacts
        for _ in range(self.config.iterations):
            for c in constraints:
                c.solve()
            for c in contacts:
                c.solve()

    def step(self) -> None:
        """Advance the simulation by one fixed timestep."""
        cfg = self.config
        prof = self.profiler

        if prof:
            with prof.section("predict"):
                predict(self.particles, cfg.dt, cfg.gravity, cfg.damping)
            with prof.section("relax"):
                self._relax()
            with prof.section("reconcile"):
                reconcile_velocities(self.particles, cfg.dt)
        else:
            predict(self.particles, cfg.dt, cfg.gravity, cfg.damping)
            self._relax()
            reconcile_velocities(self.particles, cfg.dt)

        self.tick += 1
