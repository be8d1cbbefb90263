# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric safety.

Provides low-level 2D vector operations used by the solver, including
normalization, perpendiculars, the shoelace area and the finite-or-zero
guard that keeps corrections from propagating NaN/inf through a ring.
All vector functions operate on numpy arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, fallback: float = 1.0) -> np.ndarray:
    """
    Return v divided by its length.

    A zero-length vector is divided by `fallback` instead, which leaves it
    at zero rather than producing NaN.
    """
    n = norm(v) or fallback
    return v / n


def perp(v: np.ndarray) -> np.ndarray:
    """Rotate a 2D vector by +90 degrees: (x, y) -> (-y, x)."""
    return np.array([-v[1], v[0]], dtype=np.float64)


def finite_or_zero(x):
    """
    Replace non-finite components with zero.

    Works on scalars and arrays. Every displacement the solver applies
    passes through here, so a degenerate constraint leaves its particles
    in place instead of writing NaN into them.
    """
    if np.ndim(x) == 0:
        return float(x) if np.isfinite(x) else 0.0
    return np.where(np.isfinite(x), x, 0.0)


def polygon_area(points: np.ndarray) -> float:
    """
    Signed area of a closed polygon via the shoelace formula.

    Args:
        points: Array [N, 2] of vertices in traversal order.

    Returns:
        Positive for counter-clockwise winding (in a y-up frame),
        negative for clockwise.
    """
    x = points[:, 0]
    y = points[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    return float(0.5 * np.sum(x * y_next - x_next * y))
