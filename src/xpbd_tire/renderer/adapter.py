# MIT License (see LICENSE)
"""
Renderer adapters for visualizing rings.

The solver has no rendering dependency. These adapters read the public
state of each ring (outer / inner particle positions, hub, pressure area)
and hand it to a backend. Drawing to a canvas, HUD text and input belong
to the driver; DebugRenderer and BufferedRenderer exist for console
inspection and recording.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TextIO
import sys

from ..ring import DeformableRing

if TYPE_CHECKING:
    from ..scene import Scene


def ring_snapshot(ring: DeformableRing) -> dict[str, Any]:
    """Plain-data view of a ring: positions, velocities and pressure diagnostics."""
    return {
        "outer": [p.position.tolist() for p in ring.outer],
        "inner": [p.position.tolist() for p in ring.inner],
        "outer_velocity": [p.velocity.tolist() for p in ring.outer],
        "hub": ring.hub.position.tolist(),
        "hub_velocity": ring.hub.velocity.tolist(),
        "area": ring.pressure.area(),
        "rest_area": ring.pressure.rest_area,
    }


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer.begin_frame(scene.world.tick)
        for ring in scene.rings:
            renderer.draw_ring(ring)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_scene(scene)
    """

    @abstractmethod
    def begin_frame(self, tick: int) -> None:
        ...

    @abstractmethod
    def draw_ring(self, ring: DeformableRing) -> None:
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_scene(self, scene: "Scene") -> None:
        """Render every ring in `scene` as one frame."""
        self.begin_frame(scene.world.tick)
        for ring in scene.rings:
            self.draw_ring(ring)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer.

    Output:
        === Frame 42 ===
        [0] hub=(400.00, 318.12) v=(0.00, 1.20) low=368.00 area=7711.4/7760.2
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = False):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, also list every outer particle.
        """
        self.output = output or sys.stdout
        self.verbose = verbose
        self._index = 0

    def begin_frame(self, tick: int) -> None:
        self._index = 0
        self.output.write(f"=== Frame {tick} ===\n")

    def draw_ring(self, ring: DeformableRing) -> None:
        h, v = ring.hub.position, ring.hub.velocity
        line = (
            f"[{self._index}] hub=({h[0]:.2f}, {h[1]:.2f}) v=({v[0]:.2f}, {v[1]:.2f})"
            f" low={ring.lowest_y():.2f} area={ring.pressure.area():.1f}/{ring.pressure.rest_area:.1f}"
        )
        self.output.write(line + "\n")
        if self.verbose:
            for i, p in enumerate(ring.outer):
                self.output.write(f"    o{i} ({p.x:.2f}, {p.y:.2f})\n")
        self._index += 1

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer for headless runs and benchmarks."""

    def begin_frame(self, tick: int) -> None:
        pass

    def draw_ring(self, ring: DeformableRing) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records ring snapshots per frame for playback or analysis.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            scene.step()
            renderer.render_scene(scene)
        lows = [max(y for _, y in f["rings"][0]["outer"]) for f in renderer.frames]
    """

    def __init__(self) -> None:
        self.frames: list[dict[str, Any]] = []
        self._current_frame: dict[str, Any] | None = None

    def begin_frame(self, tick: int) -> None:
        self._current_frame = {"tick": tick, "rings": []}

    def draw_ring(self, ring: DeformableRing) -> None:
        if self._current_frame is None:
            return
        self._current_frame["rings"].append(ring_snapshot(ring))

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
