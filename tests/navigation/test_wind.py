"""Tests for the actual-wind model."""
import random
import pytest

from src.core.vectors import angle_difference
from src.navigation.wind import WindModel, WindState


def test_plan_does_not_seed_actual(fixed_rng):
    model = WindModel(rng=fixed_rng(uniform_value=20))
    model.plan(350, 10)
    assert model.state.plan_dir == 350
    assert model.actual == (0.0, 0.0)


def test_start_seeds_base_from_plan(fixed_rng):
    model = WindModel(rng=fixed_rng(uniform_value=20))
    model.plan(350, 10)
    seeded = model.start()
    assert seeded.actual_dir == pytest.approx(10)
    assert seeded.actual_spd == pytest.approx(30)
    assert (seeded.base_dir, seeded.base_spd) == (seeded.actual_dir, seeded.actual_spd)
    assert model.last_change_time == 0.0


def test_start_speed_never_negative(fixed_rng):
    model = WindModel(rng=fixed_rng(uniform_value=-10))
    model.plan(90, 5)
    assert model.start().actual_spd == 0.0


def test_fluctuation_is_around_base_not_previous(fixed_rng):
    model = WindModel(rng=fixed_rng(uniform_value=0, randint_value=5))
    model.plan(10, 30)
    model.start()
    model.fluctuate()
    assert model.actual == (15, 35)
    model.fluctuate()
    assert model.actual == (15, 35)


def test_fluctuation_clamped(fixed_rng):
    model = WindModel(rng=fixed_rng(uniform_value=0, randint_value=-5))
    model.plan(0, 10)
    model.start()
    model.fluctuate()
    assert model.state.actual_spd == 20

    model = WindModel(rng=fixed_rng(uniform_value=0, randint_value=5))
    model.plan(0, 80)
    model.start()
    model.fluctuate()
    assert model.state.actual_spd == 70


def test_update_waits_full_interval(fixed_rng):
    model = WindModel(rng=fixed_rng(randint_value=1), interval_s=3.0)
    model.plan(180, 40)
    model.start()
    assert model.update(2.9) is False
    assert model.update(3.0) is True
    assert model.update(5.9) is False
    assert model.update(6.0) is True


def test_seeded_runs_repeat():
    def run(seed):
        model = WindModel(rng=random.Random(seed))
        model.plan(270, 30)
        model.start()
        samples = []
        for step in range(1, 50):
            model.update(step * 1.0)
            samples.append(model.actual)
        return samples

    assert run(5) == run(5)


def test_seeded_fluctuation_stays_bounded():
    model = WindModel(rng=random.Random(11))
    model.plan(270, 30)
    base = model.start()
    assert abs(angle_difference(270, base.base_dir)) <= 40
    assert 20 <= base.base_spd <= 40
    for _ in range(200):
        model.fluctuate()
        assert abs(angle_difference(base.base_dir, model.state.actual_dir)) <= 5 + 1e-9
        assert 20 <= model.state.actual_spd <= 70


def test_wind_state_copy_is_independent():
    state = WindState(plan_dir=90)
    copy = state.copy()
    copy.plan_dir = 180
    assert state.plan_dir == 90
