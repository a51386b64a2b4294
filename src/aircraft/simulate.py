"""
Headless training runs and robustness (Monte-Carlo over wind/spawn seeds).
A scripted trainee flies the route by periodically entering the wind-corrected heading
to the next waypoint, the way a pilot would work the wind triangle from the planned wind.
"""
import random
from typing import List, Optional

from src.core.vectors import bearing_between
from src.core.wind_triangle import required_heading
from src.simulation.session import TrainingSession
from src.training_settings import (
    AIRCRAFT_DEFAULT_TAS,
    AUTOPILOT_CAPTURE_NM,
    AUTOPILOT_MAX_TIME_S,
    AUTOPILOT_TICK_S,
    AUTOPILOT_UPDATE_S,
)


class TraineeAutopilot:
    """
    Scripted trainee: every update_s seconds, enter required_heading(bearing to target, TAS, planned wind).
    The target advances when the aircraft is within capture_nm of it.
    """

    def __init__(
        self,
        session: TrainingSession,
        update_s: float = AUTOPILOT_UPDATE_S,
        capture_nm: float = AUTOPILOT_CAPTURE_NM,
    ):
        self.session = session
        self.update_s = update_s
        self.capture_nm = capture_nm
        self.target_index = 1
        self.last_update: Optional[float] = None
        self.captured: List[float] = []

    @property
    def finished(self) -> bool:
        return self.target_index >= len(self.session.route)

    @property
    def target(self) -> Optional[str]:
        if self.finished:
            return None
        return self.session.route[self.target_index]

    def step(self) -> None:
        """Call between ticks: capture the target if close, then re-enter heading when due."""
        s = self.session
        if self.finished:
            return
        if s.distance_to_nm(self.target) <= self.capture_nm:
            self.captured.append(s.time)
            self.target_index += 1
            self.last_update = None
            if self.finished:
                return
        if self.last_update is not None and s.time - self.last_update < self.update_s:
            return
        course = bearing_between(s.aircraft.position, s.positions[self.target])
        solution = required_heading(course, s.aircraft.tas, s.wind.state.plan_dir, s.wind.state.plan_spd)
        s.set_heading(solution.heading)
        self.last_update = s.time


def simulate_training(
    session: TrainingSession,
    tick_s: float = AUTOPILOT_TICK_S,
    max_time_s: float = AUTOPILOT_MAX_TIME_S,
    update_s: float = AUTOPILOT_UPDATE_S,
    capture_nm: float = AUTOPILOT_CAPTURE_NM,
) -> dict:
    """
    Fly a started session to the end of its route with the scripted trainee.
    Returns dict with 'completed', 'time_s', 'captured_at' (s per waypoint) and 'snapshot'.
    """
    pilot = TraineeAutopilot(session, update_s=update_s, capture_nm=capture_nm)
    while not pilot.finished and session.time < max_time_s:
        pilot.step()
        if pilot.finished:
            break
        if session.tick(tick_s) is None:
            break
    return {
        "completed": pilot.finished,
        "time_s": session.time,
        "captured_at": list(pilot.captured),
        "snapshot": session.snapshot(),
    }


def ata_errors(snapshot) -> List[Optional[int]]:
    """ATA - ETA in minutes per leg (None where the waypoint was never passed)."""
    errors = []
    for entry in snapshot.flight_plan[1:]:
        if entry.ata is None or entry.eta is None:
            errors.append(None)
        else:
            errors.append(entry.ata - entry.eta)
    return errors


def monte_carlo_training(
    wind_dir: float,
    wind_spd: float,
    tas: float = AIRCRAFT_DEFAULT_TAS,
    route: Optional[List[str]] = None,
    num_seeds: int = 10,
    seed: Optional[int] = 42,
    max_time_s: float = AUTOPILOT_MAX_TIME_S,
) -> dict:
    """
    Repeat a headless run under different actual-wind/spawn seeds; report completion rate and timing.
    route=None flies the default route; otherwise a validated custom route.
    """
    master = random.Random(seed)
    results = []
    for _ in range(num_seeds):
        session = TrainingSession(rng=random.Random(master.randrange(2**32)))
        if route is None:
            session.decide_wind(wind_dir, wind_spd, tas)
            session.start_training()
        else:
            session.build_custom_route(route, wind_dir=wind_dir, wind_spd=wind_spd, tas=tas)
            session.start_custom_training()
        run = simulate_training(session, max_time_s=max_time_s)
        snap = run["snapshot"]
        results.append(
            {
                "completed": run["completed"],
                "time_s": run["time_s"],
                "actual_wind": (snap.wind.base_dir, snap.wind.base_spd),
                "ata_errors_min": ata_errors(snap),
            }
        )
    completed = sum(1 for r in results if r["completed"])
    return {
        "completion_rate": completed / len(results) if results else 1.0,
        "runs": len(results),
        "total_times": [r["time_s"] for r in results],
        "results": results,
    }
