"""Tests for headless training runs and Monte-Carlo robustness."""
import random
import pytest

from src.aircraft.simulate import (
    TraineeAutopilot,
    ata_errors,
    monte_carlo_training,
    simulate_training,
)
from src.simulation.session import TrainingSession


def _short_session(seed=1):
    session = TrainingSession(rng=random.Random(seed))
    session.build_custom_route(["SEL", "SOT"], wind_dir=270, wind_spd=30, tas=240)
    session.start_custom_training()
    return session


def test_autopilot_enters_first_heading():
    session = _short_session()
    pilot = TraineeAutopilot(session)
    assert pilot.target == "SOT"
    pilot.step()
    assert session.aircraft.turning
    assert pilot.last_update == 0.0


def test_simulate_short_route_completes():
    session = _short_session()
    run = simulate_training(session, max_time_s=3600)
    assert run["completed"]
    assert len(run["captured_at"]) == 1
    # ~17 NM at ~240 kt
    assert 60 < run["time_s"] < 900
    assert run["snapshot"].started


def test_simulate_stops_at_time_limit():
    session = _short_session()
    run = simulate_training(session, max_time_s=30)
    assert not run["completed"]
    assert run["time_s"] == pytest.approx(30, abs=0.2)


def test_ata_errors_none_until_passed():
    session = _short_session()
    assert ata_errors(session.snapshot()) == [None]


def test_monte_carlo_short_route():
    result = monte_carlo_training(270, 30, 240, route=["SEL", "SOT"], num_seeds=2, seed=1, max_time_s=3600)
    assert result["runs"] == 2
    assert 0 <= result["completion_rate"] <= 1
    assert len(result["total_times"]) == 2
    for r in result["results"]:
        assert 20 <= r["actual_wind"][1] <= 40


def test_monte_carlo_repeatable():
    a = monte_carlo_training(270, 30, 240, route=["SEL", "SOT"], num_seeds=2, seed=9, max_time_s=3600)
    b = monte_carlo_training(270, 30, 240, route=["SEL", "SOT"], num_seeds=2, seed=9, max_time_s=3600)
    assert a["total_times"] == b["total_times"]
