"""
Actual-time-of-arrival detection: per route waypoint, freeze the time of closest approach
the first time the aircraft starts moving away from it.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from src.core.vectors import Point, distance_between

logger = logging.getLogger(__name__)


@dataclass
class ArrivalRecord:
    """
    Closest approach seen so far (NM) and when; frozen once passed.
    With require_approach the record only passes after the distance has shrunk at least once.
    """

    waypoint: str
    closest: float = math.inf
    time: Optional[float] = None
    passed: bool = False
    require_approach: bool = False
    approached: bool = False

    def copy(self) -> "ArrivalRecord":
        return replace(self)

    def observe(self, distance: float, current_time: float) -> bool:
        """Feed one distance sample. Returns True on the single passed transition."""
        if self.passed:
            return False
        if distance < self.closest:
            if self.time is not None:
                self.approached = True
            self.closest = distance
            self.time = current_time
        elif distance > self.closest and self.time is not None:
            if self.require_approach and not self.approached:
                return False
            self.passed = True
            return True
        return False


class ArrivalTracker:
    """
    One record per non-START route waypoint, keyed by position in the route
    so a waypoint visited twice has two independent records.
    A record for the start waypoint stays unarmed until the record before it has passed
    and then needs a real approach, so a loop route cannot close while the aircraft is
    still leaving the start or the previous waypoint.
    """

    def __init__(self, route: List[str]):
        self.route = list(route)
        self.records: List[ArrivalRecord] = [
            ArrivalRecord(wp, require_approach=wp == self.route[0]) for wp in self.route[1:]
        ]

    def armed(self, index: int) -> bool:
        """Whether records[index] is observed yet (0-based)."""
        if index == 0 or self.records[index].waypoint != self.route[0]:
            return True
        return self.records[index - 1].passed

    def update(
        self,
        aircraft_pos: Point,
        positions: Dict[str, Point],
        current_time: float,
        nm_to_pixels: float,
    ) -> List[int]:
        """
        Observe every record at the current aircraft position.
        Returns the leg indices (1-based, matching flight-plan rows) that passed on this tick.
        """
        passed = []
        for i, record in enumerate(self.records):
            pos = positions.get(record.waypoint)
            if pos is None or not self.armed(i):
                continue
            dist_nm = distance_between(aircraft_pos, pos) / nm_to_pixels
            if record.observe(dist_nm, current_time):
                logger.info(
                    "%s passed at %.1f s (closest %.2f NM)", record.waypoint, record.time, record.closest
                )
                passed.append(i + 1)
        return passed

    def snapshot(self) -> List[ArrivalRecord]:
        return [r.copy() for r in self.records]
