import numpy as np
import pytest
from xpbd_tire.constants import PRESSURE_RELAXATION_LIMIT, PRESSURE_STRENGTH
from xpbd_tire.types import Particle
from xpbd_tire.constraints import PressureConstraint


def make_loop(n=8, r=50.0, cx=0.0, cy=0.0, clockwise=False, inv_mass=1.0):
    sign = -1.0 if clockwise else 1.0
    pts = []
    for i in range(n):
        a = sign * 2.0 * np.pi * i / n
        pts.append(Particle((cx + r * np.cos(a), cy + r * np.sin(a)), inv_mass=inv_mass))
    return pts


def area_gradient(pts):
    """Per-vertex dA/dx, dA/dy, written out vertex by vertex."""
    n = len(pts)
    grad = []
    for i in range(n):
        prev, nxt = pts[i - 1].position, pts[(i + 1) % n].position
        grad.append((0.5 * (nxt[1] - prev[1]), 0.5 * (prev[0] - nxt[0])))
    return np.array(grad)


def gradient_weight(pts):
    grad = area_gradient(pts)
    return float(sum(p.inv_mass * float(g @ g) for p, g in zip(pts, grad)))


def test_first_solve_captures_rest_area_without_moving():
    pts = make_loop()
    before = [p.position.copy() for p in pts]
    c = PressureConstraint(pts, strength=0.00045)

    assert not c.ready
    c.solve()

    assert c.ready
    # Regular octagon: 0.5 * n * r^2 * sin(2π/n)
    assert c.rest_area == pytest.approx(0.5 * 8 * 50.0**2 * np.sin(2 * np.pi / 8))
    for p, b in zip(pts, before):
        assert np.array_equal(p.position, b)


@pytest.mark.parametrize("n, strength", [
    (8, 5e-5),                  # k * S = 0.5, undershoots
    (28, PRESSURE_STRENGTH),    # default tire, k * S ~ 1.56
])
def test_stable_strength_applied_as_configured(n, strength):
    """One solve moves vertex i by exactly -grad_i * (A - rest) * strength * w_i."""
    pts = make_loop(n=n)
    pts[3].inv_mass = 0.5
    c = PressureConstraint(pts, strength=strength)
    c.solve()
    rest = c.rest_area

    pts[0].position[:] = (40.0, 0.0)
    assert strength * gradient_weight(pts) < PRESSURE_RELAXATION_LIMIT

    grad = area_gradient(pts)
    err = c.area() - rest
    expected = [p.position - g * err * strength * p.inv_mass for p, g in zip(pts, grad)]

    c.solve()

    for p, e in zip(pts, expected):
        assert p.position.tolist() == pytest.approx(e.tolist(), abs=1e-9)


def test_default_tire_strength_is_not_capped():
    pts = make_loop(n=28, r=50.0)
    weight = gradient_weight(pts)
    assert weight == pytest.approx(3466.09, abs=0.01)
    assert 1.0 < PRESSURE_STRENGTH * weight < PRESSURE_RELAXATION_LIMIT


def test_over_relaxed_strength_converges():
    """Default tire: each solve overshoots the rest area, but by less every time."""
    pts = make_loop(n=28)
    c = PressureConstraint(pts, strength=PRESSURE_STRENGTH)
    c.solve()
    rest = c.rest_area

    pts[5].position *= 0.7
    errors = [c.area() - rest]
    for _ in range(40):
        c.solve()
        errors.append(c.area() - rest)

    assert errors[0] < 0.0
    assert errors[1] > 0.0  # overshoot
    assert abs(errors[1]) < abs(errors[0])
    assert abs(errors[-1]) < 1e-3


def test_area_restored_after_vertex_pushed_in():
    pts = make_loop()
    c = PressureConstraint(pts, strength=0.00045)
    c.solve()
    rest = c.rest_area

    # Push one vertex halfway toward the center
    pts[0].position[:] = (25.0, 0.0)
    initial_err = abs(c.area() - rest)
    assert initial_err > 100.0

    for _ in range(400):
        c.solve()

    assert abs(c.area() - rest) < 1e-3


def test_over_expanded_loop_is_pulled_back():
    pts = make_loop()
    c = PressureConstraint(pts, strength=0.00045)
    c.solve()
    rest = c.rest_area

    for p in pts:
        p.position *= 1.2

    for _ in range(400):
        c.solve()

    assert c.area() == pytest.approx(rest, abs=1e-3)


def test_clockwise_winding_restores_too():
    pts = make_loop(clockwise=True)
    c = PressureConstraint(pts, strength=0.00045)
    c.solve()
    assert c.rest_area < 0.0

    pts[3].position *= 0.6
    for _ in range(400):
        c.solve()

    assert c.area() == pytest.approx(c.rest_area, abs=1e-3)


def test_huge_strength_is_capped():
    """
    Strength far above the stable limit is reduced to
    PRESSURE_RELAXATION_LIMIT / S, so the loop stays bounded and converges.
    """
    pts = make_loop(n=6)
    c = PressureConstraint(pts, strength=10.0)
    c.solve()
    rest = c.rest_area

    pts[1].position *= 0.5
    grad = area_gradient(pts)
    k = PRESSURE_RELAXATION_LIMIT / gradient_weight(pts)
    err = c.area() - rest
    expected = [p.position - g * err * k for p, g in zip(pts, grad)]

    c.solve()
    for p, e in zip(pts, expected):
        assert p.position.tolist() == pytest.approx(e.tolist(), abs=1e-9)

    errors = [abs(err), abs(c.area() - rest)]
    for _ in range(400):
        c.solve()
        errors.append(abs(c.area() - rest))

    assert max(errors) < 1.5 * errors[0]
    assert errors[-1] < 1e-3
    assert all(np.all(np.isfinite(p.position)) for p in pts)


def test_pinned_vertices_stay_put():
    pts = make_loop()
    pts[2].inv_mass = 0.0
    pinned = pts[2].position.copy()
    c = PressureConstraint(pts, strength=0.00045)
    c.solve()

    pts[0].position[:] = (10.0, 0.0)
    for _ in range(30):
        c.solve()

    assert np.array_equal(pts[2].position, pinned)


def test_collapsed_loop_stays_finite():
    """Zero-area loop: no gradient, no movement, no NaN."""
    pts = [Particle((5.0, 5.0)) for _ in range(8)]
    c = PressureConstraint(pts, strength=0.00045)
    c.solve()
    c.solve()

    for p in pts:
        assert np.array_equal(p.position, [5.0, 5.0])
