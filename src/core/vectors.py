"""
Planar vector primitives for the chart plane.
Courses are compass bearings in degrees (0 = up/north, clockwise positive).
Chart coordinates are pixels with Y increasing downward.
"""
import math
from typing import Tuple

Point = Tuple[float, float]


def round_nearest(value: float) -> int:
    """Round half up to the nearest integer (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def unit_vector(course: float) -> Tuple[float, float]:
    """Unit (dx, dy) along a compass course. Courses outside [0, 360] fall back to 0."""
    if course < 0 or course > 360:
        course = 0
    rad = math.radians(course)
    return math.sin(rad), -math.cos(rad)


def normalize_angle(angle: float) -> float:
    """Map any angle in degrees into [0, 360)."""
    angle = angle % 360.0
    # float modulo can round a tiny negative up to exactly 360
    if angle >= 360.0:
        angle -= 360.0
    return angle


def angle_difference(angle_from: float, angle_to: float) -> float:
    """Signed shortest rotation from angle_from to angle_to in (-180, 180]. Positive = right turn."""
    diff = normalize_angle(angle_to - angle_from)
    if diff > 180.0:
        diff -= 360.0
    return diff


def vector_bearing(dx: float, dy: float) -> float:
    """Unrounded compass bearing of a chart-plane vector, in [0, 360)."""
    return normalize_angle(math.degrees(math.atan2(dx, -dy)))


def bearing_between(p1: Point, p2: Point) -> int:
    """Bearing from p1 to p2 rounded to the nearest whole degree."""
    return round_nearest(vector_bearing(p2[0] - p1[0], p2[1] - p1[1])) % 360


def distance_between(p1: Point, p2: Point) -> float:
    """Euclidean distance between two chart points."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])
