"""
Aircraft kinematics on the flat chart plane: heading and TAS converge to commanded targets
after a fixed response delay, track/ground speed come from the wind triangle, and position
integrates over time. Positions in chart pixels; heading in degrees; speeds in knots; time in seconds.
"""
import math
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional, Tuple

from src.core.vectors import Point, angle_difference, normalize_angle, unit_vector
from src.core.wind_triangle import track_and_ground_speed
from src.training_settings import (
    AIRCRAFT_ACCEL_TIME_S,
    AIRCRAFT_DEFAULT_TAS,
    AIRCRAFT_HISTORY_INTERVAL_S,
    AIRCRAFT_HISTORY_MAX,
    AIRCRAFT_RESPONSE_DELAY_S,
    AIRCRAFT_TURN_RATE_DEGS,
    SPAWN_MAX_NM,
    SPAWN_MIN_NM,
    SPAWN_SPREAD_DEG,
)

HistorySample = Tuple[float, float, float]  # (x, y, t)


@dataclass
class PendingCommand:
    """A heading or TAS command waiting out its delay / converging. start_value is set when the delay ends."""

    target: float
    issued_at: float
    delay: float
    start_value: Optional[float] = None

    def elapsed(self, current_time: float) -> float:
        return current_time - self.issued_at


@dataclass
class AircraftState:
    """State at one instant: position, heading/TAS, derived track/GS, wind, pending commands, history."""

    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0
    tas: float = float(AIRCRAFT_DEFAULT_TAS)
    track: int = 0
    ground_speed: int = 0
    wind_dir: float = 0.0
    wind_spd: float = 0.0
    heading_command: Optional[PendingCommand] = None
    tas_command: Optional[PendingCommand] = None
    history: Deque[HistorySample] = field(default_factory=lambda: deque(maxlen=AIRCRAFT_HISTORY_MAX))
    last_history_save: float = 0.0

    @property
    def position(self) -> Point:
        return self.x, self.y

    @property
    def turning(self) -> bool:
        return self.heading_command is not None

    @property
    def speed_changing(self) -> bool:
        return self.tas_command is not None

    def copy(self) -> "AircraftState":
        """Independent copy (history included) for read-only snapshots."""
        return AircraftState(
            x=self.x,
            y=self.y,
            heading=self.heading,
            tas=self.tas,
            track=self.track,
            ground_speed=self.ground_speed,
            wind_dir=self.wind_dir,
            wind_spd=self.wind_spd,
            heading_command=None if self.heading_command is None else PendingCommand(**vars(self.heading_command)),
            tas_command=None if self.tas_command is None else PendingCommand(**vars(self.tas_command)),
            history=deque(self.history, maxlen=self.history.maxlen),
            last_history_save=self.last_history_save,
        )


class AircraftModel:
    """
    Planar turn-rate and airspeed-lag model.
    Heading turns at turn_rate_degs in the shorter direction; TAS changes linearly over accel_time_s.
    Both wait response_delay_s after a command before changing.
    """

    def __init__(
        self,
        turn_rate_degs: float = AIRCRAFT_TURN_RATE_DEGS,
        accel_time_s: float = AIRCRAFT_ACCEL_TIME_S,
        response_delay_s: float = AIRCRAFT_RESPONSE_DELAY_S,
        history_max: int = AIRCRAFT_HISTORY_MAX,
        history_interval_s: float = AIRCRAFT_HISTORY_INTERVAL_S,
        default_tas: float = AIRCRAFT_DEFAULT_TAS,
    ):
        self.turn_rate_degs = turn_rate_degs
        self.accel_time_s = accel_time_s
        self.response_delay_s = response_delay_s
        self.history_max = history_max
        self.history_interval_s = history_interval_s
        self.default_tas = default_tas

    def new_state(self, x: float = 0.0, y: float = 0.0, heading: float = 0.0, tas: Optional[float] = None) -> AircraftState:
        return AircraftState(
            x=x,
            y=y,
            heading=normalize_angle(heading),
            tas=float(self.default_tas if tas is None else tas),
            history=deque(maxlen=self.history_max),
        )

    def spawn(
        self,
        origin: Point,
        first_leg_course: float,
        nm_to_pixels: float,
        rng: random.Random,
        min_nm: float = SPAWN_MIN_NM,
        max_nm: float = SPAWN_MAX_NM,
        spread_deg: float = SPAWN_SPREAD_DEG,
    ) -> AircraftState:
        """Fresh state a few NM out along the first leg, with a heading roughly on course."""
        dist_px = rng.uniform(min_nm, max_nm) * nm_to_pixels
        angle = math.radians(first_leg_course + rng.uniform(-spread_deg, spread_deg))
        heading = first_leg_course + rng.uniform(-spread_deg, spread_deg)
        return self.new_state(
            x=origin[0] + dist_px * math.sin(angle),
            y=origin[1] - dist_px * math.cos(angle),
            heading=heading,
        )

    def command_heading(self, state: AircraftState, heading: float, current_time: float) -> None:
        state.heading_command = PendingCommand(
            target=normalize_angle(heading), issued_at=current_time, delay=self.response_delay_s
        )

    def command_tas(self, state: AircraftState, tas: float, current_time: float) -> None:
        state.tas_command = PendingCommand(
            target=float(tas), issued_at=current_time, delay=self.response_delay_s
        )

    def _update_heading(self, state: AircraftState, dt: float, current_time: float) -> None:
        cmd = state.heading_command
        if cmd is None or cmd.elapsed(current_time) < cmd.delay:
            return
        diff = angle_difference(state.heading, cmd.target)
        step = self.turn_rate_degs * dt
        if abs(diff) <= step:
            state.heading = cmd.target
            state.heading_command = None
        else:
            state.heading = normalize_angle(state.heading + math.copysign(step, diff))

    def _update_tas(self, state: AircraftState, current_time: float) -> None:
        cmd = state.tas_command
        if cmd is None or cmd.elapsed(current_time) < cmd.delay:
            return
        if cmd.start_value is None:
            cmd.start_value = state.tas
        accel_elapsed = cmd.elapsed(current_time) - cmd.delay
        if accel_elapsed >= self.accel_time_s:
            state.tas = cmd.target
            state.tas_command = None
        else:
            rate = (cmd.target - cmd.start_value) / self.accel_time_s
            state.tas = cmd.start_value + rate * accel_elapsed

    def update(
        self,
        state: AircraftState,
        dt: float,
        current_time: float,
        wind_dir: float,
        wind_spd: float,
    ) -> None:
        """Advance heading/TAS convergence and recompute track and ground speed in the current wind."""
        self._update_heading(state, dt, current_time)
        self._update_tas(state, current_time)
        state.wind_dir = wind_dir
        state.wind_spd = wind_spd
        self.refresh_track(state)

    def refresh_track(self, state: AircraftState) -> None:
        solution = track_and_ground_speed(state.heading, state.tas, state.wind_dir, state.wind_spd)
        state.track = solution.track
        state.ground_speed = solution.ground_speed

    def update_position(self, state: AircraftState, dt: float, nm_to_pixels: float) -> None:
        """Move along track at ground speed (knots -> chart pixels per second)."""
        dx, dy = unit_vector(state.track)
        speed_px_s = state.ground_speed * nm_to_pixels / 3600.0
        state.x += dx * speed_px_s * dt
        state.y += dy * speed_px_s * dt

    def save_history(self, state: AircraftState, current_time: float) -> bool:
        """Append the position at most once per history interval. Oldest samples fall off past the cap."""
        if current_time - state.last_history_save >= self.history_interval_s:
            state.history.append((state.x, state.y, current_time))
            state.last_history_save = current_time
            return True
        return False
