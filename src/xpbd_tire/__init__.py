# MIT License (see LICENSE)
"""
xpbd_tire - Soft-body tires on a 2D position-based (XPBD-style) solver.

A tire is two concentric rings of particles joined by spokes, with an
internal pressure constraint on the outer ring. The solver predicts
positions, relaxes all constraints a fixed number of times and derives
velocities from the resulting position change.

Main entry points:
    - World: Particles, constraints and the fixed-timestep step().
    - DeformableRing: The tire composition and its actions.
    - Scene: Rings plus ground, box and soft inter-ring contacts.
    - SolverConfig / RingTuning: Solver parameters and live ring tuning.

Submodules:
    - constraints: Distance and pressure constraints.
    - collision: Soft, box and ground contacts; direct projection helpers.
    - core: Predict / reconcile passes and invariants.
    - renderer: Optional visualization adapters.

Example:
    from xpbd_tire import Scene

    scene = Scene(ground_y=380.0)
    tire = scene.add_ring(400.0, 260.0)
    for _ in range(120):
        scene.step(steer=40.0)
"""
from .config import SolverConfig, RingTuning, DEFAULT_CONFIG
from .types import Particle, Rect
from .world import World
from .ring import DeformableRing
from .scene import Scene

__all__ = [
    # Configuration
    "SolverConfig",
    "RingTuning",
    "DEFAULT_CONFIG",
    # Core simulation
    "World",
    "Particle",
    "Rect",
    # Bodies
    "DeformableRing",
    "Scene",
]
