# MIT License (see LICENSE)
"""
Direct position projection against the ground and a static box.

These helpers move penetrating ring particles straight out of the
forbidden region, outside the relaxation loop. A driver can call them
before World.step(); Scene instead registers GroundContact / BoxContact
constraints so collision converges together with the ring's own
constraints. Both paths share the same contact math.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ..constants import GROUND_PAD
from ..types import Rect
from .contact import BoxContact, GroundContact

if TYPE_CHECKING:
    from ..ring import DeformableRing


def collide_ground(ring: "DeformableRing", ground_y: float, pad: float = GROUND_PAD) -> int:
    """
    Project every inner and outer particle of `ring` above `ground_y - pad`.

    Downward velocity of projected particles is zeroed.

    Returns:
        Number of particles that were moved.
    """
    moved = 0
    lim = ground_y - pad
    for p in ring.particles():
        if p.inv_mass and p.position[1] > lim:
            GroundContact(p, ground_y, pad).solve()
            moved += 1
    return moved


def collide_box(ring: "DeformableRing", box: Rect, radius: float = 0.0) -> int:
    """
    Project ring particles out of `box` grown by `radius`, via the nearest edge.

    Returns:
        Number of particles that were moved.
    """
    moved = 0
    for p in ring.particles():
        contact = BoxContact(p, box, radius)
        hit = contact.penetration()
        if hit is None or hit[0] <= 0.0 or not p.inv_mass:
            continue
        contact.solve()
        moved += 1
    return moved
