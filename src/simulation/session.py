"""
Training session: composition root owning the waypoint chart, wind model, aircraft, flight plan,
arrival tracker, clock and event log for one trainee.
Commands (decide wind, build route, start, set heading/TAS) are accepted between ticks and
take effect on the next tick; snapshot() returns independent copies for rendering.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from src.aircraft.model import AircraftModel, AircraftState
from src.core.formatting import format_degrees, format_hhmm, format_wind
from src.core.vectors import Point, distance_between, round_nearest
from src.exceptions import TrainingNotStartedError, WindNotDecidedError
from src.navigation.arrival import ArrivalRecord, ArrivalTracker
from src.navigation.planner import (
    END_REMARK,
    FlightPlanEntry,
    mark_start,
    plan_flight,
    refresh_eta,
)
from src.navigation.waypoints import (
    Leg,
    WaypointGraph,
    build_graph,
    derive_legs,
    layout_chart,
    legs_from_table,
    nm_to_pixels_ratio,
    operative_map,
)
from src.navigation.wind import WindModel, WindState
from src.simulation.clock import SimulationClock
from src.simulation.events import EventLog
from src.training_settings import (
    AIRCRAFT_DEFAULT_TAS,
    CHART_HEIGHT_PX,
    CHART_WIDTH_PX,
    DEFAULT_OPERATIVE_OVERRIDES,
    DEFAULT_ROUTE,
    DEFAULT_ROUTE_LEGS,
    MAGNETIC_VARIATION,
    MAP_HEIGHT_NM,
    MAX_TICK_S,
)

logger = logging.getLogger(__name__)

DEFAULT_MODE = "default"
CUSTOM_MODE = "custom"


@dataclass
class TrainingSnapshot:
    """Consistent read-only view taken between ticks."""

    time: float
    started: bool
    paused: bool
    mode: str
    route: List[str]
    aircraft: AircraftState
    wind: WindState
    flight_plan: List[FlightPlanEntry]
    arrivals: List[ArrivalRecord]
    events: List[str]
    tuned: Optional[str] = None
    tuned_distance_nm: float = 0.0
    operative: Dict[str, bool] = field(default_factory=dict)

    def to_dict(self, include_history: bool = False) -> dict:
        ac = self.aircraft
        out = {
            "time_s": self.time,
            "elapsed": format_hhmm(int(self.time // 60)),
            "started": self.started,
            "paused": self.paused,
            "mode": self.mode,
            "route": list(self.route),
            "aircraft": {
                "x": ac.x,
                "y": ac.y,
                "heading": ac.heading,
                "tas": ac.tas,
                "track": ac.track,
                "ground_speed": ac.ground_speed,
                "wind_dir": ac.wind_dir,
                "wind_spd": ac.wind_spd,
                "turning": ac.turning,
                "speed_changing": ac.speed_changing,
            },
            "wind": {
                "plan_dir": self.wind.plan_dir,
                "plan_spd": self.wind.plan_spd,
                "actual_dir": self.wind.actual_dir,
                "actual_spd": self.wind.actual_spd,
            },
            "flight_plan": [e.display() for e in self.flight_plan],
            "arrivals": [
                {
                    "waypoint": r.waypoint,
                    "closest_nm": None if r.time is None else r.closest,
                    "time_s": r.time,
                    "passed": r.passed,
                }
                for r in self.arrivals
            ],
            "events": list(self.events),
            "tuned": self.tuned,
            "tuned_distance_nm": self.tuned_distance_nm,
            "operative": dict(self.operative),
        }
        if include_history:
            out["history"] = [list(s) for s in ac.history]
        return out


class TrainingSession:
    """
    One trainee's run. rng feeds the wind model and the spawn position; pass
    random.Random(seed) for repeatable sessions.
    """

    def __init__(
        self,
        graph: Optional[WaypointGraph] = None,
        rng: Optional[random.Random] = None,
        aircraft_model: Optional[AircraftModel] = None,
        wind_model: Optional[WindModel] = None,
        chart_width_px: float = CHART_WIDTH_PX,
        chart_height_px: float = CHART_HEIGHT_PX,
        map_height_nm: float = MAP_HEIGHT_NM,
        variation: float = MAGNETIC_VARIATION,
        max_delta: float = MAX_TICK_S,
    ):
        self.graph = graph or build_graph()
        self.rng = rng or random.Random()
        self.aircraft_model = aircraft_model or AircraftModel()
        self.wind = wind_model or WindModel(rng=self.rng)
        self.variation = variation
        self.nm_to_pixels = nm_to_pixels_ratio(chart_height_px, map_height_nm)
        self.positions: Dict[str, Point] = layout_chart(
            self.graph, self.nm_to_pixels, origin=(chart_width_px / 2, chart_height_px / 2)
        )

        self.mode = DEFAULT_MODE
        self.route: List[str] = []
        self.legs: List[Leg] = []
        self.flight_plan: List[FlightPlanEntry] = []
        self.planned_tas: float = AIRCRAFT_DEFAULT_TAS
        self.operative: Dict[str, bool] = operative_map(self.graph, DEFAULT_OPERATIVE_OVERRIDES)
        self.aircraft: AircraftState = self.aircraft_model.new_state()
        self.tracker = ArrivalTracker([])
        self.tuned: Optional[str] = None
        self.events = EventLog()
        self.clock = SimulationClock(
            stages=[
                ("wind", self._stage_wind),
                ("kinematics", self._stage_kinematics),
                ("position", self._stage_position),
                ("history", self._stage_history),
                ("eta", self._stage_eta),
                ("arrival", self._stage_arrival),
                ("tuning", self._stage_tuning),
            ],
            max_delta=max_delta,
        )

    # ----------------------------------------------------------------- commands

    @property
    def started(self) -> bool:
        return self.clock.running

    @property
    def time(self) -> float:
        return self.clock.time

    def decide_wind(self, wind_dir: float, wind_spd: float, tas: float = AIRCRAFT_DEFAULT_TAS) -> List[FlightPlanEntry]:
        """Plan the default route for the operator's wind and TAS."""
        self.mode = DEFAULT_MODE
        self.route = list(DEFAULT_ROUTE)
        self.legs = legs_from_table(DEFAULT_ROUTE_LEGS)
        self.operative = operative_map(self.graph, DEFAULT_OPERATIVE_OVERRIDES)
        self._plan(wind_dir, wind_spd, tas, final_remark=END_REMARK)
        self.events.add(self.time, f"WIND DECIDED: {format_wind(wind_dir, wind_spd)}, TAS: {tas:g}")
        return self.flight_plan

    def build_custom_route(
        self,
        route: List[str],
        operative: Optional[Mapping[str, bool]] = None,
        wind_dir: float = 0,
        wind_spd: float = 0,
        tas: float = AIRCRAFT_DEFAULT_TAS,
    ) -> List[FlightPlanEntry]:
        """
        Plan a user-built route. The route must already be validated (see waypoints.validate_route).
        operative overrides apply to the tuned-station scan for this run; fixes stay operative
        and stations off the route are never tuned.
        """
        self.mode = CUSTOM_MODE
        self.route = list(route)
        self.legs = derive_legs(self.route, self.graph)
        self.operative = operative_map(self.graph, operative, route=self.route)
        self._plan(wind_dir, wind_spd, tas)
        self.events.add(self.time, f"CUSTOM ROUTE: {' → '.join(self.route)}")
        self.events.add(self.time, f"WIND: {format_wind(wind_dir, wind_spd)}, TAS: {tas:g}")
        return self.flight_plan

    def start_training(self) -> TrainingSnapshot:
        if self.mode != DEFAULT_MODE or not self.flight_plan:
            raise WindNotDecidedError("decide the wind before starting training")
        self._start("TRAINING STARTED")
        return self.snapshot()

    def start_custom_training(self) -> TrainingSnapshot:
        if self.mode != CUSTOM_MODE or not self.legs:
            raise WindNotDecidedError("calculate a custom route before starting custom training")
        self._start("CUSTOM TRAINING STARTED")
        return self.snapshot()

    def set_heading(self, heading: float) -> None:
        self._require_started()
        self.aircraft_model.command_heading(self.aircraft, heading, self.time)
        self.events.add(self.time, f"HDG {format_degrees(heading)}(M) ENTERED")

    def set_tas(self, tas: float) -> None:
        self._require_started()
        self.aircraft_model.command_tas(self.aircraft, tas, self.time)
        self.events.add(self.time, f"TAS {tas:g} ENTERED")

    def pause(self) -> None:
        self.clock.pause()

    def resume(self) -> None:
        self.clock.resume()

    def tick(self, dt: float) -> Optional[float]:
        """Advance one frame; returns the applied (clamped) delta or None when not running."""
        return self.clock.tick(dt)

    # ------------------------------------------------------------------ queries

    def snapshot(self) -> TrainingSnapshot:
        return TrainingSnapshot(
            time=self.time,
            started=self.started,
            paused=self.clock.paused,
            mode=self.mode,
            route=list(self.route),
            aircraft=self.aircraft.copy(),
            wind=self.wind.state.copy(),
            flight_plan=[e.copy() for e in self.flight_plan],
            arrivals=self.tracker.snapshot(),
            events=self.events.entries(),
            tuned=self.tuned,
            tuned_distance_nm=self.distance_to_nm(self.tuned) if self.tuned else 0.0,
            operative=dict(self.operative),
        )

    def distance_to_nm(self, ident: str) -> float:
        return distance_between(self.aircraft.position, self.positions[ident]) / self.nm_to_pixels

    def nearest_operative(self) -> Optional[str]:
        """Nearest operative, distance-capable waypoint; first in graph order wins ties."""
        nearest = None
        min_dist = float("inf")
        for wp in self.graph:
            if not wp.distance_capable or not self.operative.get(wp.ident, wp.operative):
                continue
            pos = self.positions.get(wp.ident)
            if pos is None:
                continue
            dist = distance_between(self.aircraft.position, pos)
            if dist < min_dist:
                min_dist = dist
                nearest = wp.ident
        return nearest

    # ---------------------------------------------------------------- internals

    def _require_started(self) -> None:
        if not self.started:
            raise TrainingNotStartedError("training has not started")

    def _plan(self, wind_dir: float, wind_spd: float, tas: float, final_remark: Optional[str] = None) -> None:
        # a new plan ends any run in progress
        self.clock.stop()
        self.planned_tas = tas
        self.wind.plan(wind_dir, wind_spd)
        self.flight_plan = plan_flight(
            self.legs, tas, wind_dir, wind_spd, variation=self.variation, final_remark=final_remark
        )
        logger.debug("Planned %d legs for %s", len(self.legs), self.route)

    def _start(self, label: str) -> None:
        first = self.legs[0]
        self.aircraft = self.aircraft_model.spawn(
            self.positions[first.from_id], first.magnetic_course, self.nm_to_pixels, self.rng
        )
        actual = self.wind.start()
        self.aircraft.wind_dir = actual.actual_dir
        self.aircraft.wind_spd = actual.actual_spd
        self.aircraft_model.refresh_track(self.aircraft)

        self.clock.start()
        self.tracker = ArrivalTracker(self.route)
        for entry in self.flight_plan:
            entry.eta = None
            entry.ata = None
        mark_start(self.flight_plan)
        refresh_eta(self.flight_plan)
        self.tuned = self.nearest_operative()

        self.events.add(self.time, label)
        self.events.add(self.time, f"ACTUAL WIND: {format_wind(actual.actual_dir, actual.actual_spd)}")
        self.events.add(
            self.time,
            f"INITIAL HDG: {format_degrees(self.aircraft.heading)}, TAS: {round_nearest(self.aircraft.tas)}",
        )

    def _stage_wind(self, dt: float, now: float) -> None:
        self.wind.update(now)

    def _stage_kinematics(self, dt: float, now: float) -> None:
        wind_dir, wind_spd = self.wind.actual
        self.aircraft_model.update(self.aircraft, dt, now, wind_dir, wind_spd)

    def _stage_position(self, dt: float, now: float) -> None:
        self.aircraft_model.update_position(self.aircraft, dt, self.nm_to_pixels)

    def _stage_history(self, dt: float, now: float) -> None:
        self.aircraft_model.save_history(self.aircraft, now)

    def _stage_eta(self, dt: float, now: float) -> None:
        refresh_eta(self.flight_plan)

    def _stage_arrival(self, dt: float, now: float) -> None:
        passed = self.tracker.update(self.aircraft.position, self.positions, now, self.nm_to_pixels)
        for index in passed:
            record = self.tracker.records[index - 1]
            if index < len(self.flight_plan):
                entry = self.flight_plan[index]
                entry.ata = round_nearest(record.time / 60)
                self.events.add(now, f"{record.waypoint} PASSED - ATA: {format_hhmm(entry.ata)}")

    def _stage_tuning(self, dt: float, now: float) -> None:
        self.tuned = self.nearest_operative()
