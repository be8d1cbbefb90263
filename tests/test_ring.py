import numpy as np
import pytest
from xpbd_tire.config import RingTuning, SolverConfig
from xpbd_tire.constants import PRESSURE_RELAXATION_LIMIT, PRESSURE_STRENGTH
from xpbd_tire.constraints import DistanceConstraint, PressureConstraint
from xpbd_tire.ring import DeformableRing
from xpbd_tire.world import World


def make_ring(count=8, cx=100.0, cy=100.0, **kw):
    world = World(config=SolverConfig(gravity=0.0, damping=1.0))
    return world, DeformableRing(world, cx, cy, count=count, **kw)


def test_layout_and_ownership():
    world, ring = make_ring(count=8, r_outer=50.0, r_inner=28.0)

    assert len(ring.outer) == len(ring.inner) == 8
    assert len(world.particles) == 2 * 8 + 1
    assert world.particles[0] is ring.hub
    assert ring.hub.position.tolist() == [100.0, 100.0]
    assert ring.hub.mass == pytest.approx(5.0)

    for i in range(8):
        r_o = np.hypot(*(ring.outer[i].position - ring.hub.position))
        r_i = np.hypot(*(ring.inner[i].position - ring.hub.position))
        assert r_o == pytest.approx(50.0)
        assert r_i == pytest.approx(28.0)
        assert ring.outer[i].mass == pytest.approx(1.0)
        assert ring.inner[i].mass == pytest.approx(1.4)


def test_constraint_wiring_and_order():
    world, ring = make_ring(count=6)
    n = 6

    assert len(world.constraints) == 3 * n + 1
    assert world.constraints[:n] == ring.outer_constraints
    assert world.constraints[n:2 * n] == ring.inner_constraints
    assert world.constraints[2 * n:3 * n] == ring.spoke_constraints
    assert world.constraints[-1] is ring.pressure
    assert isinstance(ring.pressure, PressureConstraint)
    assert ring.pressure.points is ring.outer

    for i in range(n):
        oc = ring.outer_constraints[i]
        assert oc.a is ring.outer[i] and oc.b is ring.outer[(i + 1) % n]
        ic = ring.inner_constraints[i]
        assert ic.a is ring.inner[i] and ic.b is ring.inner[(i + 1) % n]
        sc = ring.spoke_constraints[i]
        assert sc.a is ring.inner[i] and sc.b is ring.outer[i]


def test_rest_lengths_from_geometry():
    _, ring = make_ring(count=8, r_outer=50.0, r_inner=28.0)

    chord_o = 2 * 50.0 * np.sin(np.pi / 8)
    chord_i = 2 * 28.0 * np.sin(np.pi / 8)
    for c in ring.outer_constraints:
        assert c.rest_length == pytest.approx(chord_o)
    for c in ring.inner_constraints:
        assert c.rest_length == pytest.approx(chord_i)
    for c in ring.spoke_constraints:
        assert c.rest_length == pytest.approx(22.0)


def test_default_stiffness_groups():
    _, ring = make_ring()
    assert {c.stiffness for c in ring.outer_constraints} == {0.22}
    assert {c.stiffness for c in ring.inner_constraints} == {0.28}
    assert {c.stiffness for c in ring.spoke_constraints} == {0.35}


@pytest.mark.parametrize("kw", [
    {"count": 2},
    {"r_outer": 0.0},
    {"r_inner": -1.0},
    {"r_outer": 20.0, "r_inner": 30.0},
])
def test_invalid_construction_rejected(kw):
    world = World()
    with pytest.raises(ValueError):
        DeformableRing(world, 0.0, 0.0, **kw)


def test_steer_adds_tangential_velocity():
    _, ring = make_ring(count=12)
    ring.steer(2.0)

    for p in ring.outer:
        r = p.position - ring.hub.position
        assert float(np.dot(p.velocity, r)) == pytest.approx(0.0, abs=1e-9)
        assert np.hypot(*p.velocity) == pytest.approx(ring.steer_strength * 2.0)
    for p in ring.inner:
        assert p.velocity.tolist() == [0.0, 0.0]

    # Rightmost particle (angle 0) is pushed toward +y for a positive direction
    assert ring.outer[0].vy > 0.0


def test_steer_zero_is_noop():
    _, ring = make_ring()
    ring.steer(0.0)
    assert all(p.velocity.tolist() == [0.0, 0.0] for p in ring.outer)


def test_inflate_pushes_outward():
    _, ring = make_ring(count=10)
    ring.inflate()

    for p in ring.outer:
        r = p.position - ring.hub.position
        n = r / np.hypot(*r)
        assert p.velocity.tolist() == pytest.approx((n * ring.air_pressure).tolist())


def test_apply_impulse_moves_ring_not_hub():
    _, ring = make_ring()
    ring.apply_impulse(3.0, -20.0)

    for p in ring.particles():
        assert p.velocity.tolist() == [3.0, -20.0]
    assert ring.hub.velocity.tolist() == [0.0, 0.0]


def test_set_stiffness_and_mass_scale():
    _, ring = make_ring()
    ring.set_stiffness(0.5, 0.6, 0.7)
    assert {c.stiffness for c in ring.outer_constraints} == {0.5}
    assert {c.stiffness for c in ring.inner_constraints} == {0.6}
    assert {c.stiffness for c in ring.spoke_constraints} == {0.7}

    ring.set_mass_scale(2.0)
    assert all(p.inv_mass == pytest.approx(0.5) for p in ring.outer)
    assert all(p.inv_mass == pytest.approx(1 / 2.8) for p in ring.inner)
    assert ring.hub.mass == pytest.approx(5.0)

    with pytest.raises(ValueError):
        ring.set_mass_scale(0.0)


def test_apply_tuning():
    _, ring = make_ring()
    ring.apply_tuning(RingTuning(tire=0.1, rim=0.2, spoke=0.3, mass_scale=0.5))
    assert ring.outer_constraints[0].stiffness == 0.1
    assert ring.spoke_constraints[-1].stiffness == 0.3
    assert ring.outer[0].inv_mass == pytest.approx(2.0)


def test_recenter_hub_follows_ring():
    _, ring = make_ring()
    for p in ring.particles():
        p.position += (40.0, -10.0)
        p.velocity[:] = (5.0, 1.0)

    ring.recenter_hub()

    assert ring.hub.position.tolist() == pytest.approx([140.0, 90.0])
    assert ring.hub.velocity.tolist() == pytest.approx([5.0, 1.0])


def test_clamp_horizontal_speed():
    _, ring = make_ring()
    ring.apply_impulse(400.0, 30.0)
    ring.outer[0].velocity[0] = -900.0

    ring.clamp_horizontal_speed(250.0)

    assert all(abs(p.vx) <= 250.0 for p in ring.particles())
    assert ring.outer[0].vx == -250.0
    assert ring.outer[1].vy == 30.0


def test_pressure_diagnostics_after_step():
    world, ring = make_ring(count=8, r_outer=50.0)
    world.step()

    expected = 0.5 * 8 * 50.0**2 * np.sin(2 * np.pi / 8)
    assert ring.pressure.ready
    assert ring.pressure.rest_area == pytest.approx(expected)
    assert ring.pressure.area() == pytest.approx(expected)
    assert isinstance(ring.outer_constraints[0], DistanceConstraint)


def test_default_tire_pressure_uses_configured_strength():
    """The 28-particle default tire is below the pressure cap, so a solve uses strength as-is."""
    world = World(config=SolverConfig(gravity=0.0, damping=1.0))
    ring = DeformableRing(world, 0.0, 0.0)
    world.step()

    pts = np.array([p.position for p in ring.outer])
    grad = 0.5 * np.stack([
        np.roll(pts[:, 1], -1) - np.roll(pts[:, 1], 1),
        np.roll(pts[:, 0], 1) - np.roll(pts[:, 0], -1),
    ], axis=1)
    weight = sum(p.inv_mass * float(g @ g) for p, g in zip(ring.outer, grad))

    assert ring.pressure.strength == PRESSURE_STRENGTH
    assert PRESSURE_STRENGTH * weight < PRESSURE_RELAXATION_LIMIT
