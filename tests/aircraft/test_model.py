"""Tests for aircraft kinematics: turn/TAS lag, wind drift, position and history."""
import random
import pytest

from src.aircraft.model import AircraftModel, AircraftState
from src.core.vectors import angle_difference, distance_between
from src.core.wind_triangle import track_and_ground_speed


def _run(model, state, start_tick, end_tick, dt=0.1, wind=(0, 0)):
    """Tick from start_tick to end_tick inclusive; time = tick / 10. Returns headings seen."""
    seen = []
    for i in range(start_tick, end_tick + 1):
        model.update(state, dt, i / 10, *wind)
        seen.append((i / 10, state.heading, state.tas))
    return seen


def test_new_state_defaults():
    model = AircraftModel()
    state = model.new_state(heading=370)
    assert state.heading == 10
    assert state.tas == 240
    assert state.history.maxlen == 3600
    assert not state.turning and not state.speed_changing


def test_heading_holds_during_delay_then_turns_at_rate():
    model = AircraftModel(turn_rate_degs=3, response_delay_s=5)
    state = model.new_state(heading=0)
    model.command_heading(state, 90, 0.0)
    seen = _run(model, state, 1, 400)

    for t, heading, _ in seen:
        if t < 5.0:
            assert heading == 0
    headings = [h for _, h, _ in seen]
    for prev, cur in zip(headings, headings[1:]):
        assert 0 <= cur - prev <= 0.3 + 1e-9
        assert cur <= 90
    assert state.heading == 90
    assert not state.turning


def test_left_turn_through_north():
    model = AircraftModel()
    state = model.new_state(heading=10)
    model.command_heading(state, 350, 0.0)
    _run(model, state, 1, 50)
    assert state.heading < 10
    _run(model, state, 51, 200)
    assert state.heading == 350
    assert not state.turning


def test_new_heading_command_restarts_delay():
    model = AircraftModel()
    state = model.new_state(heading=0)
    model.command_heading(state, 90, 0.0)
    _run(model, state, 1, 30)
    model.command_heading(state, 180, 3.0)
    _run(model, state, 31, 79)
    assert state.heading == 0
    _run(model, state, 80, 90)
    assert state.heading > 0


def test_tas_changes_linearly_after_delay():
    model = AircraftModel(accel_time_s=10, response_delay_s=5)
    state = model.new_state(tas=240)
    model.command_tas(state, 200, 0.0)
    _run(model, state, 1, 49)
    assert state.tas == 240
    _run(model, state, 50, 100)
    assert state.tas == pytest.approx(220)
    assert state.speed_changing
    _run(model, state, 101, 150)
    assert state.tas == 200
    assert not state.speed_changing


def test_update_sets_track_from_wind():
    model = AircraftModel()
    state = model.new_state(heading=90)
    model.update(state, 0.1, 0.1, 0, 30)
    expected = track_and_ground_speed(90, 240, 0, 30)
    assert (state.track, state.ground_speed) == (expected.track, expected.ground_speed)
    assert (state.wind_dir, state.wind_spd) == (0, 30)


def test_update_position_in_pixels():
    model = AircraftModel()
    state = model.new_state(heading=90)
    model.refresh_track(state)
    model.update_position(state, 1.0, 5.0)
    assert state.x == pytest.approx(240 * 5 / 3600)
    assert state.y == pytest.approx(0.0, abs=1e-9)


def test_history_sampled_once_per_interval():
    model = AircraftModel()
    state = model.new_state()
    assert model.save_history(state, 0.5) is False
    assert model.save_history(state, 1.0) is True
    assert model.save_history(state, 1.5) is False
    assert model.save_history(state, 2.0) is True
    assert [s[2] for s in state.history] == [1.0, 2.0]


def test_history_capped_to_most_recent():
    model = AircraftModel()
    state = model.new_state()
    for t in range(1, 4001):
        model.save_history(state, float(t))
    assert len(state.history) == 3600
    assert state.history[0][2] == 401.0
    assert state.history[-1][2] == 4000.0


def test_spawn_near_first_waypoint():
    model = AircraftModel()
    for seed in range(20):
        state = model.spawn((400.0, 400.0), 72, 5.0, random.Random(seed))
        dist_nm = distance_between((400.0, 400.0), state.position) / 5.0
        assert 2.0 - 1e-9 <= dist_nm <= 4.0 + 1e-9
        assert abs(angle_difference(72, state.heading)) <= 30 + 1e-9
        assert state.tas == 240


def test_copy_is_independent():
    model = AircraftModel()
    state = model.new_state()
    model.command_heading(state, 90, 0.0)
    model.save_history(state, 1.0)
    copy = state.copy()
    copy.history.append((1.0, 1.0, 2.0))
    copy.heading_command.target = 180
    assert len(state.history) == 1
    assert state.heading_command.target == 90
    assert isinstance(copy, AircraftState)
