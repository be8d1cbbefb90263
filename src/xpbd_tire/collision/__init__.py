# MIT License (see LICENSE)
"""
Collision handling for soft rings.

This subpackage provides:
    - Contact constraints: SoftContact, BoxContact, GroundContact.
    - Broadphase: Brute-force outer-particle pair search between rings.
    - Projection: Direct ground / box projection helpers for drivers.

Typical usage:
    from xpbd_tire.collision import soft_contact_pairs, SoftContact

    for a, b in soft_contact_pairs(rings, threshold=10.0):
        world.add_transient_contact(SoftContact(a, b, 10.0, 0.2))
"""
from .contact import SoftContact, BoxContact, GroundContact
from .broadphase import soft_contact_pairs, aabb_for_particles
from .projection import collide_ground, collide_box

__all__ = [
    # Contacts
    "SoftContact",
    "BoxContact",
    "GroundContact",
    # Broadphase
    "soft_contact_pairs",
    "aabb_for_particles",
    # Projection
    "collide_ground",
    "collide_box",
]
