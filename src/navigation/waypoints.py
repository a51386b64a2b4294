"""
Waypoint network: immutable station/fix reference data, directed connections, and chart layout.
Positions are laid out on the flat chart plane from connection courses and distances.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from src.core.vectors import Point, unit_vector
from src.exceptions import RouteError
from src.training_settings import MAX_CUSTOM_LEGS, NAVAIDS

logger = logging.getLogger(__name__)

DISTANCE_CAPABLE_TYPES = ("VOR-DME", "VORTAC")
FIX_TYPE = "FIX"


@dataclass(frozen=True)
class Connection:
    """Directed airway segment to another waypoint."""

    magnetic_course: int
    distance_nm: float


@dataclass(frozen=True)
class Waypoint:
    """Station or fix. `kind` is VOR-DME / VORTAC (bearing + distance) or FIX (bearing only)."""

    ident: str
    kind: str
    operative: bool = True
    connections: Mapping[str, Connection] = field(default_factory=dict)
    name: str = ""
    full_name: str = ""
    frequency: Optional[str] = None
    channel: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    @property
    def distance_capable(self) -> bool:
        return self.kind in DISTANCE_CAPABLE_TYPES


@dataclass(frozen=True)
class Leg:
    """One route leg, inheriting course and distance from its connection."""

    from_id: str
    to_id: str
    magnetic_course: int
    distance_nm: float


class WaypointGraph:
    """Read-only lookup of waypoints by identifier, in insertion order."""

    def __init__(self, waypoints: Iterable[Waypoint]):
        self._waypoints: Dict[str, Waypoint] = {wp.ident: wp for wp in waypoints}

    def lookup(self, ident: str) -> Waypoint:
        """Return the waypoint; KeyError for unknown identifiers."""
        return self._waypoints[ident]

    def __contains__(self, ident: str) -> bool:
        return ident in self._waypoints

    def __iter__(self):
        return iter(self._waypoints.values())

    def __len__(self) -> int:
        return len(self._waypoints)

    def ids(self) -> List[str]:
        return list(self._waypoints)

    def connection(self, from_id: str, to_id: str) -> Optional[Connection]:
        wp = self._waypoints.get(from_id)
        if wp is None:
            return None
        return wp.connections.get(to_id)


def build_graph(navaids: Optional[Mapping[str, Tuple]] = None) -> WaypointGraph:
    """Build the graph from a settings table (defaults to training_settings.NAVAIDS)."""
    table = NAVAIDS if navaids is None else navaids
    waypoints = []
    for ident, row in table.items():
        name, full_name, kind, freq, channel, lat, lon, operative, links = row
        connections = {
            to_id: Connection(magnetic_course=int(mc), distance_nm=float(dist))
            for to_id, (mc, dist) in links.items()
        }
        waypoints.append(
            Waypoint(
                ident=ident,
                kind=kind,
                operative=operative,
                connections=connections,
                name=name,
                full_name=full_name,
                frequency=freq,
                channel=channel,
                lat=lat,
                lon=lon,
            )
        )
    return WaypointGraph(waypoints)


def validate_route(
    route: List[str], graph: WaypointGraph, max_legs: int = MAX_CUSTOM_LEGS
) -> List[str]:
    """
    Check a user-built route: >= 2 waypoints, at most max_legs legs, known ids, connected pairs.
    Returns the upper-cased route; raises RouteError on the first problem.
    """
    route = [str(r).strip().upper() for r in route]
    if len(route) < 2:
        raise RouteError("a route needs at least two waypoints")
    if len(route) - 1 > max_legs:
        raise RouteError(f"a route may have at most {max_legs} legs")
    for i, ident in enumerate(route):
        if ident not in graph:
            raise RouteError(f"{ident} is not in the waypoint database")
        if i > 0 and graph.connection(route[i - 1], ident) is None:
            raise RouteError(f"no airway from {route[i - 1]} to {ident}")
    return route


def derive_legs(route: List[str], graph: WaypointGraph) -> List[Leg]:
    """Legs for consecutive route pairs. The route is assumed valid (see validate_route)."""
    legs = []
    for from_id, to_id in zip(route, route[1:]):
        conn = graph.lookup(from_id).connections[to_id]
        legs.append(Leg(from_id, to_id, conn.magnetic_course, conn.distance_nm))
    return legs


def legs_from_table(table: List[Tuple[str, str, int, float]]) -> List[Leg]:
    """Legs from a published (from, to, mc, distance) table."""
    return [Leg(f, t, int(mc), float(dist)) for f, t, mc, dist in table]


def operative_map(
    graph: WaypointGraph,
    overrides: Optional[Mapping[str, bool]] = None,
    route: Optional[List[str]] = None,
) -> Dict[str, bool]:
    """
    Operative status per waypoint with overrides applied. Fixes are always operative.
    With a route, only the route's waypoints can be operative; every other id is off.
    """
    overrides = overrides or {}
    status = {}
    for wp in graph:
        if route is not None and wp.ident not in route:
            status[wp.ident] = False
        elif wp.kind == FIX_TYPE:
            status[wp.ident] = True
        else:
            status[wp.ident] = bool(overrides.get(wp.ident, wp.operative))
    return status


def nm_to_pixels_ratio(chart_height_px: float, map_height_nm: float) -> float:
    return chart_height_px / map_height_nm


def layout_chart(
    graph: WaypointGraph,
    nm_to_pixels: float,
    origin: Point = (0.0, 0.0),
    root: Optional[str] = None,
) -> Dict[str, Point]:
    """
    Chart positions by breadth-first walk from `root` (first waypoint by default) placed at origin.
    Each unplaced neighbour sits at parent + unit_vector(mc) * distance * nm_to_pixels; first placement wins.
    """
    if len(graph) == 0:
        return {}
    root = root or graph.ids()[0]
    positions: Dict[str, Point] = {}
    queue = deque([(root, origin)])
    while queue:
        ident, pos = queue.popleft()
        if ident in positions:
            continue
        positions[ident] = pos
        if ident not in graph:
            continue
        for to_id, conn in graph.lookup(ident).connections.items():
            if to_id in positions:
                continue
            dx, dy = unit_vector(conn.magnetic_course)
            dist_px = conn.distance_nm * nm_to_pixels
            queue.append((to_id, (pos[0] + dx * dist_px, pos[1] + dy * dist_px)))
    missing = [i for i in graph.ids() if i not in positions]
    if missing:
        logger.warning("Waypoints not reachable from %s left off the chart: %s", root, missing)
    return positions
