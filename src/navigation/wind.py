"""
Actual-wind model: seeded once per run as a random perturbation of the planned wind,
then oscillating around that base every fluctuation interval.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

from src.core.vectors import normalize_angle
from src.training_settings import (
    WIND_FLUCTUATION_DIR,
    WIND_FLUCTUATION_INTERVAL_S,
    WIND_FLUCTUATION_SPD,
    WIND_MAX_SPD,
    WIND_MIN_SPD,
    WIND_SEED_DIR_SPREAD,
    WIND_SEED_SPD_SPREAD,
)

logger = logging.getLogger(__name__)


@dataclass
class WindState:
    """Planned, actual and base wind (direction FROM in degrees, speed in knots)."""

    plan_dir: float = 0.0
    plan_spd: float = 0.0
    actual_dir: float = 0.0
    actual_spd: float = 0.0
    base_dir: float = 0.0
    base_spd: float = 0.0

    def copy(self) -> "WindState":
        return WindState(
            self.plan_dir, self.plan_spd,
            self.actual_dir, self.actual_spd,
            self.base_dir, self.base_spd,
        )


class WindModel:
    """
    Actual wind for one training run.
    rng is any random.Random-compatible source (uniform, randint); pass a seeded one for repeatable runs.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        interval_s: float = WIND_FLUCTUATION_INTERVAL_S,
        seed_dir_spread: float = WIND_SEED_DIR_SPREAD,
        seed_spd_spread: float = WIND_SEED_SPD_SPREAD,
        fluctuation_dir: int = WIND_FLUCTUATION_DIR,
        fluctuation_spd: int = WIND_FLUCTUATION_SPD,
        min_spd: float = WIND_MIN_SPD,
        max_spd: float = WIND_MAX_SPD,
    ):
        self.rng = rng or random.Random()
        self.interval_s = interval_s
        self.seed_dir_spread = seed_dir_spread
        self.seed_spd_spread = seed_spd_spread
        self.fluctuation_dir = fluctuation_dir
        self.fluctuation_spd = fluctuation_spd
        self.min_spd = min_spd
        self.max_spd = max_spd
        self.state = WindState()
        self.last_change_time = 0.0

    def plan(self, wind_dir: float, wind_spd: float) -> None:
        """Record the operator's planned wind; actual wind is not seeded until start()."""
        self.state.plan_dir = float(wind_dir)
        self.state.plan_spd = float(wind_spd)

    def start(self) -> WindState:
        """Seed actual wind from the plan and fix it as the base for this run."""
        s = self.state
        s.actual_dir = normalize_angle(
            s.plan_dir + self.rng.uniform(-self.seed_dir_spread, self.seed_dir_spread)
        )
        s.actual_spd = max(
            0.0, s.plan_spd + self.rng.uniform(-self.seed_spd_spread, self.seed_spd_spread)
        )
        s.base_dir = s.actual_dir
        s.base_spd = s.actual_spd
        self.last_change_time = 0.0
        logger.debug("Actual wind seeded at %.0f/%.0f", s.actual_dir, s.actual_spd)
        return s.copy()

    def fluctuate(self) -> None:
        """One bounded step around the base wind (never around the previous value)."""
        s = self.state
        dir_var = self.rng.randint(-self.fluctuation_dir, self.fluctuation_dir)
        spd_var = self.rng.randint(-self.fluctuation_spd, self.fluctuation_spd)
        s.actual_dir = normalize_angle(s.base_dir + dir_var)
        s.actual_spd = max(self.min_spd, min(self.max_spd, s.base_spd + spd_var))

    def update(self, current_time: float) -> bool:
        """Fluctuate when a full interval has elapsed since the last change. Returns True if it did."""
        if current_time - self.last_change_time >= self.interval_s:
            self.fluctuate()
            self.last_change_time = current_time
            return True
        return False

    @property
    def actual(self):
        return self.state.actual_dir, self.state.actual_spd
