# MIT License (see LICENSE)
"""
Wall-clock timing of solver phases.

A World with a profiler attached times "predict", "relax" and "reconcile"
on every step; Scene.step() adds "contacts" for the soft-contact rebuild.

Example:
    profiler = Profiler()
    world = World(profiler=profiler)
    for _ in range(120):
        world.step()
    print(profiler.stats.summary()["relax"]["mean_ms"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np


@dataclass
class ProfileStats:
    """Per-phase step timings in seconds, in recording order."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, elapsed: float) -> None:
        self.samples.setdefault(name, []).append(elapsed)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Returns:
            {phase: {"n", "mean_ms", "max_ms", "total_ms"}} for every phase
            timed so far.
        """
        out = {}
        for name, times in self.samples.items():
            ms = 1e3 * np.asarray(times)
            out[name] = {
                "n": len(times),
                "mean_ms": float(ms.mean()),
                "max_ms": float(ms.max()),
                "total_ms": float(ms.sum()),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Times `with profiler.section(name):` blocks into `stats`."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
