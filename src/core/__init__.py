from .vectors import (
    angle_difference,
    bearing_between,
    distance_between,
    normalize_angle,
    round_nearest,
    unit_vector,
)
from .wind_triangle import infer_wind, required_heading, track_and_ground_speed
from .calculator import calculate_ete

__all__ = [
    "angle_difference",
    "bearing_between",
    "distance_between",
    "normalize_angle",
    "round_nearest",
    "unit_vector",
    "infer_wind",
    "required_heading",
    "track_and_ground_speed",
    "calculate_ete",
]
