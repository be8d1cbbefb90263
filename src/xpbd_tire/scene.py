# MIT License (see LICENSE)
"""
Physics-side orchestration of tires, ground and a static box.

The Scene wires everything a frame needs between input and rendering:
    1. Apply tuning queued since the last step (thread-safe hand-off).
    2. Player actions: steer, jump when grounded.
    3. Inflate every ring.
    4. Rebuild the transient soft contacts between rings.
    5. world.step().
    6. Recenter hubs and cap the player's horizontal speed.

Ground and box collision are registered as World constraints when a ring is
added (one GroundContact and, if a box exists, one BoxContact per ring
particle). They are relaxed in the same loop as the ring's distance and
pressure constraints, after them in insertion order.

Structure:
    - Create a Scene (it creates its World).
    - Add rings with add_ring(); the first one is the player.
    - Call scene.step(steer=..., jump=...) once per frame.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from queue import Empty, SimpleQueue

from .collision.broadphase import soft_contact_pairs
from .collision.contact import BoxContact, GroundContact, SoftContact
from .config import DEFAULT_CONFIG, RingTuning, SolverConfig
from .constants import (
    CONTACT_RADIUS,
    CONTACT_STIFFNESS,
    GROUND_PAD,
    GROUND_Y,
    GROUNDED_TOLERANCE,
    JUMP_IMPULSE,
    MAX_PLAYER_VX,
    PRESSURE_STRENGTH,
    RING_COUNT,
    RING_INNER_RADIUS,
    RING_OUTER_RADIUS,
)
from .profiler import Profiler
from .ring import DeformableRing
from .types import Rect
from .world import World

logger = logging.getLogger(__name__)


@dataclass
class Scene:
    """
    A World plus the rings, ground line and box that live in it.

    Attributes:
        config: Solver configuration handed to the World.
        ground_y: Ground line (screen y). None disables ground contacts.
        ground_pad: Clearance kept above the ground line.
        box: Optional static box.
        box_radius: Clearance kept around the box.
        contact_radius: Soft contact radius per particle; two particles
            interact below 2 * contact_radius.
        contact_stiffness: Stiffness of soft contacts.
        tuning: Stiffness / mass settings applied to every ring.
        max_player_vx: Horizontal speed cap for the player. None disables it.
        profiler: Optional Profiler shared with the World.
        world: The World (created from `config`).
        rings: All rings, player first.
    """
    config: SolverConfig = DEFAULT_CONFIG
    ground_y: float | None = GROUND_Y
    ground_pad: float = GROUND_PAD
    box: Rect | None = None
    box_radius: float = 0.0
    contact_radius: float = CONTACT_RADIUS
    contact_stiffness: float = CONTACT_STIFFNESS
    tuning: RingTuning = field(default_factory=RingTuning)
    max_player_vx: float | None = MAX_PLAYER_VX
    profiler: Profiler | None = None

    # Internal state
    world: World = field(init=False)
    rings: list[DeformableRing] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.world = World(config=self.config, profiler=self.profiler)
        self._tuning_queue: SimpleQueue[RingTuning] = SimpleQueue()
        self._last_contact_count = 0

    @property
    def player(self) -> DeformableRing | None:
        return self.rings[0] if self.rings else None

    @property
    def ground_limit(self) -> float | None:
        """Largest y a particle may reach, or None without ground."""
        if self.ground_y is None:
            return None
        return self.ground_y - self.ground_pad

    def add_ring(
        self,
        cx: float,
        cy: float,
        count: int = RING_COUNT,
        r_outer: float = RING_OUTER_RADIUS,
        r_inner: float = RING_INNER_RADIUS,
        pressure_strength: float = PRESSURE_STRENGTH,
    ) -> DeformableRing:
        """
        Build a ring, apply the current tuning and register its collisions.

        Returns:
            The new ring. The first ring added becomes the player.
        """
        ring = DeformableRing(self.world, cx, cy, count, r_outer, r_inner, pressure_strength)
        ring.apply_tuning(self.tuning)

        for p in ring.particles():
            if self.ground_y is not None:
                self.world.add_constraint(GroundContact(p, self.ground_y, self.ground_pad))
            if self.box is not None:
                self.world.add_constraint(BoxContact(p, self.box, self.box_radius))

        self.rings.append(ring)
        logger.info("Added ring %d at (%.1f, %.1f)", len(self.rings) - 1, cx, cy)
        return ring

    # -------------------------------------------------------------------------
    # Tuning
    # -------------------------------------------------------------------------

    def request_tuning(self, tuning: RingTuning) -> None:
        """
        Queue new tuning for every ring.

        Safe to call from another thread; the change takes effect at the
        start of the next step(), never mid-solve.
        """
        self._tuning_queue.put(tuning)

    def _apply_pending_tuning(self) -> None:
        latest = None
        while True:
            try:
                latest = self._tuning_queue.get_nowait()
            except Empty:
                break
        if latest is None:
            return

        self.tuning = latest
        for ring in self.rings:
            ring.apply_tuning(latest)
        logger.info(
            "Applied tuning: tire=%.2f rim=%.2f spoke=%.2f mass_scale=%.2f",
            latest.tire, latest.rim, latest.spoke, latest.mass_scale,
        )

    # -------------------------------------------------------------------------
    # Contacts and ground queries
    # -------------------------------------------------------------------------

    def build_soft_contacts(self) -> int:
        """
        Replace last step's soft contacts with ones for the current overlap.

        Returns:
            Number of contacts created.
        """
        self.world.clear_transient_contacts()
        min_dist = 2.0 * self.contact_radius
        pairs = soft_contact_pairs(self.rings, min_dist)
        for a, b in pairs:
            self.world.add_transient_contact(SoftContact(a, b, min_dist, self.contact_stiffness))

        if len(pairs) != self._last_contact_count:
            logger.debug("Soft contacts: %d -> %d", self._last_contact_count, len(pairs))
            self._last_contact_count = len(pairs)
        return len(pairs)

    def is_grounded(self, ring: DeformableRing, tol: float = GROUNDED_TOLERANCE) -> bool:
        """True if any outer particle rests on the ground or on top of the box."""
        lim = self.ground_limit
        box = self.box
        for p in ring.outer:
            if lim is not None and p.y >= lim - tol:
                return True
            if box is not None:
                x1, y1, x2, _ = box.expanded(self.box_radius)
                if x1 <= p.x <= x2 and p.y >= y1 - tol:
                    return True
        return False

    def jump(self, ring: DeformableRing | None = None, impulse: float = JUMP_IMPULSE) -> bool:
        """
        Kick `ring` (default: the player) vertically if it is grounded.

        Returns:
            Whether the impulse was applied.
        """
        ring = ring if ring is not None else self.player
        if ring is None or not self.is_grounded(ring):
            return False
        ring.apply_impulse(0.0, impulse)
        return True

    # -------------------------------------------------------------------------
    # Step
    # -------------------------------------------------------------------------

    def step(self, steer: float = 0.0, jump: bool = False) -> None:
        """
        Advance one frame.

        Args:
            steer: Signed steering input for the player (0 for none).
            jump: Whether the player tries to jump this frame.
        """
        self._apply_pending_tuning()

        player = self.player
        if player is not None:
            player.steer(steer)
            if jump:
                self.jump(player)

        for ring in self.rings:
            ring.inflate()

        if self.profiler:
            with self.profiler.section("contacts"):
                self.build_soft_contacts()
        else:
            self.build_soft_contacts()

        self.world.step()

        for ring in self.rings:
            ring.recenter_hub()
        if player is not None and self.max_player_vx is not None:
            player.clamp_horizontal_speed(self.max_player_vx)
