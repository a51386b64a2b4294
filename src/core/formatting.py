"""Display formatting for flight-log and event-log values."""
from typing import Optional

from .vectors import round_nearest

PLACEHOLDER = "-"


def format_hhmm(minutes: Optional[int]) -> str:
    """Minutes as zero-padded HH+MM (e.g. 95 -> '01+35')."""
    if minutes is None:
        return PLACEHOLDER
    minutes = int(minutes)
    return f"{minutes // 60:02d}+{minutes % 60:02d}"


def format_hms(seconds: float) -> str:
    """Whole seconds of simulated time as HH:MM:SS."""
    seconds = int(seconds)
    hours, rem = divmod(seconds, 3600)
    mins, secs = divmod(rem, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def format_degrees(value: Optional[float]) -> str:
    """Heading or course as a zero-padded 3-digit string."""
    if value is None:
        return PLACEHOLDER
    return f"{round_nearest(value):03d}"


def format_drift(value: Optional[int]) -> str:
    """Signed drift angle with an explicit '+' for non-negative values."""
    if value is None:
        return PLACEHOLDER
    return f"+{value}" if value >= 0 else str(value)


def format_wind(direction: float, speed: float) -> str:
    """Wind as DDD/SS (e.g. 270/25)."""
    return f"{round_nearest(direction) % 360:03d}/{round_nearest(speed):02d}"
