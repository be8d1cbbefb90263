import math

import pytest
from xpbd_tire.config import DEFAULT_CONFIG, RingTuning, SolverConfig
from xpbd_tire.world import World


def test_defaults():
    assert DEFAULT_CONFIG.dt == pytest.approx(1 / 60)
    assert DEFAULT_CONFIG.gravity == 900.0
    assert DEFAULT_CONFIG.iterations == 18
    assert DEFAULT_CONFIG.damping == 0.985

    t = RingTuning()
    assert (t.tire, t.rim, t.spoke, t.mass_scale) == (0.22, 0.28, 0.35, 1.0)


@pytest.mark.parametrize("kw", [
    {"dt": 0.0},
    {"dt": -0.01},
    {"dt": math.inf},
    {"gravity": math.nan},
    {"iterations": 0},
    {"iterations": 2.5},
    {"damping": 0.0},
    {"damping": 1.5},
])
def test_solver_config_rejects_bad_values(kw):
    with pytest.raises(ValueError):
        SolverConfig(**kw)


@pytest.mark.parametrize("kw", [
    {"tire": -0.1},
    {"rim": 1.1},
    {"spoke": 2.0},
    {"mass_scale": 0.0},
    {"mass_scale": -1.0},
])
def test_ring_tuning_rejects_bad_values(kw):
    with pytest.raises(ValueError):
        RingTuning(**kw)


def test_from_dict_fills_missing_keys():
    cfg = SolverConfig.from_dict({"gravity": 0, "iterations": "6"})
    assert cfg.gravity == 0.0
    assert cfg.iterations == 6
    assert cfg.dt == DEFAULT_CONFIG.dt
    assert cfg.damping == DEFAULT_CONFIG.damping


def test_config_is_frozen_and_captured_by_world():
    cfg = SolverConfig(dt=0.02)
    world = World(config=cfg)
    assert world.config is cfg

    with pytest.raises(AttributeError):
        cfg.dt = 0.5
