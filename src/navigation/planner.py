"""
Flight-plan engine: builds the leg-by-leg plan (courses, headings, drift, ETE) for a route
under planned wind and TAS, and refreshes cumulative ETAs during the run.
Returns an ordered list of FlightPlanEntry rows: a START row followed by one row per leg.
"""
from dataclasses import dataclass, replace
from typing import List, Optional

from src.core.calculator import calculate_ete
from src.core.formatting import (
    PLACEHOLDER,
    format_degrees,
    format_drift,
    format_hhmm,
)
from src.core.vectors import normalize_angle, round_nearest
from src.core.wind_triangle import required_heading
from src.navigation.waypoints import Leg
from src.training_settings import MAGNETIC_VARIATION

START_REMARK = "START"
END_REMARK = "END"


@dataclass
class FlightPlanEntry:
    """One flight-log row. Times are whole minutes; ata is None until the waypoint is passed."""

    remark: str
    waypoint: str
    tc: Optional[int] = None
    mc: Optional[int] = None
    th: Optional[int] = None
    mh: Optional[int] = None
    da: Optional[int] = None
    gs: Optional[int] = None
    distance_nm: Optional[float] = None
    ete: Optional[int] = None
    eta: Optional[int] = None
    ata: Optional[int] = None

    def copy(self) -> "FlightPlanEntry":
        return replace(self)

    def display(self) -> dict:
        """Row as display strings (HH+MM times, 3-digit courses, signed drift)."""
        return {
            "remark": self.remark,
            "navaid": self.waypoint,
            "tc": format_degrees(self.tc),
            "mc": format_degrees(self.mc),
            "th": format_degrees(self.th),
            "mh": format_degrees(self.mh),
            "da": format_drift(self.da),
            "gs": PLACEHOLDER if self.gs is None else str(self.gs),
            "dist": PLACEHOLDER if self.distance_nm is None else f"{self.distance_nm:g}",
            "ete": format_hhmm(self.ete),
            "eta": format_hhmm(self.eta),
            "ata": format_hhmm(self.ata),
        }


def plan_leg(
    leg: Leg,
    tas: float,
    wind_dir: float,
    wind_spd: float,
    remark: str,
    variation: float = MAGNETIC_VARIATION,
) -> FlightPlanEntry:
    """Plan row for one leg: required heading from the wind triangle, true values via variation."""
    mc = leg.magnetic_course
    tc = round_nearest(normalize_angle(mc - variation))
    solution = required_heading(mc, tas, wind_dir, wind_spd)
    mh = solution.heading
    th = round_nearest(normalize_angle(mh - variation))
    gs = solution.ground_speed
    # drift shown as plain mc - mh, not wrapped
    da = mc - mh
    return FlightPlanEntry(
        remark=remark,
        waypoint=leg.to_id,
        tc=tc,
        mc=mc,
        th=th,
        mh=mh,
        da=da,
        gs=gs,
        distance_nm=leg.distance_nm,
        ete=calculate_ete(leg.distance_nm, gs),
    )


def plan_flight(
    legs: List[Leg],
    tas: float,
    wind_dir: float,
    wind_spd: float,
    variation: float = MAGNETIC_VARIATION,
    final_remark: Optional[str] = None,
) -> List[FlightPlanEntry]:
    """
    Full plan for a route's legs. Row remarks are START, then 1..n;
    final_remark (e.g. END for the default route) replaces the last leg's number.
    """
    if not legs:
        return []
    entries = [FlightPlanEntry(remark=START_REMARK, waypoint=legs[0].from_id)]
    for i, leg in enumerate(legs):
        remark = str(i + 1)
        if final_remark and i == len(legs) - 1:
            remark = final_remark
        entries.append(plan_leg(leg, tas, wind_dir, wind_spd, remark, variation))
    return entries


def refresh_eta(entries: List[FlightPlanEntry]) -> None:
    """Set each leg's ETA to the running sum of ETE. Idempotent; ETE values are never recomputed."""
    cumulative = 0
    for entry in entries[1:]:
        if entry.ete is None:
            continue
        cumulative += entry.ete
        entry.eta = cumulative


def mark_start(entries: List[FlightPlanEntry]) -> None:
    """START row gets ATA 00+00 when the run begins."""
    if entries and entries[0].ata is None:
        entries[0].ata = 0


def total_ete(entries: List[FlightPlanEntry]) -> int:
    return sum(e.ete for e in entries[1:] if e.ete is not None)
