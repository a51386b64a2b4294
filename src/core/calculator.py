"""
Navigation computer (MB-4 style) time / speed / distance problems.
Times are minutes, distances nautical miles, speeds knots.
"""
from typing import Optional

from .vectors import round_nearest


def calculate_ete(distance_nm: float, ground_speed: float) -> int:
    """Estimated time enroute in whole minutes. Zero ground speed gives 0."""
    if ground_speed == 0:
        return 0
    return round_nearest(distance_nm / ground_speed * 60)


def calculate_time(distance_nm: float, speed: float) -> int:
    """Minutes to cover distance_nm at speed, rounded. Zero speed gives 0."""
    if speed == 0:
        return 0
    return round_nearest(distance_nm / speed * 60)


def calculate_distance(time_min: float, speed: float) -> float:
    """Distance covered in time_min at speed, to 0.1 NM."""
    return round_nearest(time_min / 60 * speed * 10) / 10


def calculate_speed(distance_nm: float, time_min: float) -> Optional[float]:
    """Speed needed to cover distance_nm in time_min, to 0.1 kt. None for zero time."""
    if time_min == 0:
        return None
    return round_nearest(distance_nm / time_min * 60 * 10) / 10


def solve_time_speed_distance(
    time_min: Optional[float] = None,
    distance_nm: Optional[float] = None,
    speed: Optional[float] = None,
) -> dict:
    """
    Given exactly two of time / distance / speed, solve the third.
    Returns dict with all three keys; raises ValueError unless exactly two are given.
    """
    given = [v is not None for v in (time_min, distance_nm, speed)]
    if sum(given) != 2:
        raise ValueError("exactly two of time, distance and speed are required")
    if time_min is None:
        time_min = calculate_time(distance_nm, speed)
    elif distance_nm is None:
        distance_nm = calculate_distance(time_min, speed)
    else:
        speed = calculate_speed(distance_nm, time_min)
    return {"time_min": time_min, "distance_nm": distance_nm, "speed": speed}
