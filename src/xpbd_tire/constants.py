# MIT License (see LICENSE)
"""
Default tuning constants for tires and the solver.

Distances are in screen units (pixels) and time in seconds, so gravity of
900 units/s² reads as "pixels per second squared".
"""
from __future__ import annotations

# Solver defaults
DEFAULT_DT: float = 1 / 60
DEFAULT_GRAVITY: float = 900.0
DEFAULT_ITERATIONS: int = 18
DEFAULT_DAMPING: float = 0.985

# Separations below this have no usable direction; constraints skip them.
DISTANCE_EPS: float = 1e-6

# Tire layout
RING_COUNT: int = 28
RING_OUTER_RADIUS: float = 50.0
RING_INNER_RADIUS: float = 28.0

# Particle masses. The hub is heavier and only serves as a direction reference.
HUB_MASS: float = 5.0
OUTER_MASS: float = 1.0
INNER_MASS: float = 1.4

# Constraint stiffness per group, in [0, 1]
TIRE_STIFFNESS: float = 0.22
RIM_STIFFNESS: float = 0.28
SPOKE_STIFFNESS: float = 0.35
PRESSURE_STRENGTH: float = 0.00045

# Upper bound on strength * sum(w |grad|^2) for one pressure solve. At 2 the
# linearised area error flips sign without shrinking.
PRESSURE_RELAXATION_LIMIT: float = 1.9

# Per-step velocity pushes
AIR_PRESSURE: float = 0.002
STEER_STRENGTH: float = 0.07

# Scene defaults
GROUND_Y: float = 380.0
GROUND_PAD: float = 12.0
CONTACT_RADIUS: float = 5.0
CONTACT_STIFFNESS: float = 0.2
JUMP_IMPULSE: float = -20.0
MAX_PLAYER_VX: float = 250.0
GROUNDED_TOLERANCE: float = 0.1
