"""
Wind triangle: TAS vector + wind vector = ground-speed vector.
Wind direction is the direction the wind blows FROM; its velocity vector points to direction + 180.
All solutions are rounded to whole knots / degrees.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from .vectors import (
    angle_difference,
    normalize_angle,
    round_nearest,
    unit_vector,
    vector_bearing,
)


@dataclass(frozen=True)
class TrackSolution:
    track: int
    ground_speed: int


@dataclass(frozen=True)
class HeadingSolution:
    heading: int
    ground_speed: int
    drift_angle: int


@dataclass(frozen=True)
class WindSolution:
    wind_dir: int
    wind_spd: int


def wind_vector(wind_dir: float, wind_spd: float) -> Tuple[float, float]:
    """Velocity vector of a wind blowing FROM wind_dir."""
    dx, dy = unit_vector(normalize_angle(wind_dir + 180.0))
    return dx * wind_spd, dy * wind_spd


def _round_bearing(bearing: float) -> int:
    return round_nearest(bearing) % 360


def track_and_ground_speed(
    heading: float, tas: float, wind_dir: float, wind_spd: float
) -> TrackSolution:
    """Track and ground speed flown with a given heading and TAS in a given wind."""
    hx, hy = unit_vector(heading)
    wx, wy = wind_vector(wind_dir, wind_spd)
    gx = hx * tas + wx
    gy = hy * tas + wy
    return TrackSolution(
        track=_round_bearing(vector_bearing(gx, gy)),
        ground_speed=round_nearest(math.hypot(gx, gy)),
    )


def required_heading(
    course: float, tas: float, wind_dir: float, wind_spd: float
) -> HeadingSolution:
    """
    Heading and ground speed that hold `course` over the ground.
    The airspeed vector cancels the crosswind and supplies the rest along course.
    When the crosswind exceeds TAS the course cannot be held: returns (course, 0, 0).
    """
    wx, wy = wind_vector(wind_dir, wind_spd)
    cx, cy = unit_vector(course)
    # right-hand perpendicular to course
    px, py = -cy, cx
    crosswind = wx * px + wy * py
    along_wind = wx * cx + wy * cy

    tas_perp = -crosswind
    if abs(tas_perp) > tas:
        return HeadingSolution(heading=round_nearest(course), ground_speed=0, drift_angle=0)

    tas_along = math.sqrt(max(tas * tas - tas_perp * tas_perp, 0.0))
    ax = tas_along * cx + tas_perp * px
    ay = tas_along * cy + tas_perp * py
    heading = vector_bearing(ax, ay)
    ground_speed = tas_along + along_wind
    drift = angle_difference(heading, course)
    return HeadingSolution(
        heading=_round_bearing(heading),
        ground_speed=round_nearest(ground_speed),
        drift_angle=round_nearest(drift),
    )


def infer_wind(heading: float, tas: float, track: float, ground_speed: float) -> WindSolution:
    """Wind (FROM direction, speed) implied by heading/TAS and the observed track/GS."""
    hx, hy = unit_vector(heading)
    tx, ty = unit_vector(track)
    wx = tx * ground_speed - hx * tas
    wy = ty * ground_speed - hy * tas
    wind_to = vector_bearing(wx, wy)
    return WindSolution(
        wind_dir=_round_bearing(normalize_angle(wind_to + 180.0)),
        wind_spd=round_nearest(math.hypot(wx, wy)),
    )
