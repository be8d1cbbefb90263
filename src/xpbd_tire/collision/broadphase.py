# MIT License (see LICENSE)
"""
Candidate pair search for soft inter-ring contacts.

Scenes only ever hold a handful of rings, so this is a plain O(n²) sweep
over the outer particles of every pair of distinct rings. A cheap AABB test
per ring pair skips the particle loop when two rings are far apart.

The output is a list of (particle_a, particle_b) pairs whose separation is
below the contact threshold. Pairs never come from the same ring.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np

from ..types import Particle

if TYPE_CHECKING:
    from ..ring import DeformableRing


def aabb_for_particles(particles: Sequence[Particle]) -> tuple[float, float, float, float]:
    """
    Calculate Axis-Aligned Bounding Box (min_x, min_y, max_x, max_y).
    """
    pts = np.array([p.position for p in particles], dtype=np.float64)
    return (
        float(np.min(pts[:, 0])),
        float(np.min(pts[:, 1])),
        float(np.max(pts[:, 0])),
        float(np.max(pts[:, 1])),
    )


def _aabb_overlap(a: tuple[float, float, float, float], b: tuple[float, float, float, float], margin: float) -> bool:
    return not (
        a[2] + margin < b[0] or b[2] + margin < a[0] or
        a[3] + margin < b[1] or b[3] + margin < a[1]
    )


def soft_contact_pairs(
    rings: Sequence["DeformableRing"],
    threshold: float,
) -> list[tuple[Particle, Particle]]:
    """
    Find outer-particle pairs from different rings closer than `threshold`.

    Args:
        rings: All rings in the scene, in a stable order.
        threshold: Separation below which a pair is reported.

    Returns:
        Pairs in deterministic order (ring pair, then outer index of A,
        then outer index of B).
    """
    pairs: list[tuple[Particle, Particle]] = []
    boxes = [aabb_for_particles(r.outer) for r in rings]

    for i in range(len(rings)):
        for j in range(i + 1, len(rings)):
            if not _aabb_overlap(boxes[i], boxes[j], threshold):
                continue
            for pa in rings[i].outer:
                for pb in rings[j].outer:
                    d = pb.position - pa.position
                    if float(np.hypot(d[0], d[1])) < threshold:
                        pairs.append((pa, pb))
    return pairs
