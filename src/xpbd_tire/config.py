# MIT License (see LICENSE)
"""
Configuration records for the solver and for tire tuning.

SolverConfig is captured once by World at construction; there are no
per-step overrides. RingTuning bundles the values a UI exposes as sliders
(group stiffness and mass scale) so they can be applied to rings as one
unit.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from .constants import (
    DEFAULT_DT,
    DEFAULT_GRAVITY,
    DEFAULT_ITERATIONS,
    DEFAULT_DAMPING,
    TIRE_STIFFNESS,
    RIM_STIFFNESS,
    SPOKE_STIFFNESS,
)


@dataclass(frozen=True)
class SolverConfig:
    """
    Fixed-timestep solver parameters.

    Attributes:
        dt: Timestep in seconds. Must be positive.
        gravity: Downward acceleration (screen +y) in units/s².
        iterations: Relaxation passes per step. Must be at least 1.
        damping: Per-step velocity multiplier in (0, 1]. 1 disables damping.
    """
    dt: float = DEFAULT_DT
    gravity: float = DEFAULT_GRAVITY
    iterations: int = DEFAULT_ITERATIONS
    damping: float = DEFAULT_DAMPING

    def __post_init__(self) -> None:
        if not (np.isfinite(self.dt) and self.dt > 0):
            raise ValueError(f"dt must be a positive finite number, got {self.dt}")
        if not np.isfinite(self.gravity):
            raise ValueError(f"gravity must be finite, got {self.gravity}")
        if int(self.iterations) != self.iterations or self.iterations < 1:
            raise ValueError(f"iterations must be an integer >= 1, got {self.iterations}")
        if not (0.0 < self.damping <= 1.0):
            raise ValueError(f"damping must be in (0, 1], got {self.damping}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SolverConfig":
        """Build a config from a mapping, using defaults for missing keys."""
        return cls(
            dt=float(data.get("dt", DEFAULT_DT)),
            gravity=float(data.get("gravity", DEFAULT_GRAVITY)),
            iterations=int(data.get("iterations", DEFAULT_ITERATIONS)),
            damping=float(data.get("damping", DEFAULT_DAMPING)),
        )


DEFAULT_CONFIG = SolverConfig()


@dataclass(frozen=True)
class RingTuning:
    """
    Live-tunable ring parameters.

    Attributes:
        tire: Stiffness of the outer ring's circumferential constraints.
        rim: Stiffness of the inner ring's circumferential constraints.
        spoke: Stiffness of the radial inner-outer constraints.
        mass_scale: Multiplier on ring particle masses (hub excluded).
    """
    tire: float = TIRE_STIFFNESS
    rim: float = RIM_STIFFNESS
    spoke: float = SPOKE_STIFFNESS
    mass_scale: float = 1.0

    def __post_init__(self) -> None:
        for name in ("tire", "rim", "spoke"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ValueError(f"{name} stiffness must be in [0, 1], got {value}")
        if not (np.isfinite(self.mass_scale) and self.mass_scale > 0):
            raise ValueError(f"mass_scale must be positive, got {self.mass_scale}")
