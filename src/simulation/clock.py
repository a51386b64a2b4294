"""
Simulation clock: advances simulated time by a clamped per-tick delta and runs the
registered update stages in a fixed order. Holds only time and run/pause status.
"""
from typing import Callable, List, Optional, Sequence, Tuple

from src.training_settings import MAX_TICK_S

# stage(dt, current_time)
Stage = Callable[[float, float], None]


class SimulationClock:
    """Driver-agnostic tick: call tick(dt) from any loop, timer or test."""

    def __init__(self, stages: Sequence[Tuple[str, Stage]] = (), max_delta: float = MAX_TICK_S):
        self.stages: List[Tuple[str, Stage]] = list(stages)
        self.max_delta = max_delta
        self.time = 0.0
        self.running = False
        self.paused = False

    def start(self) -> None:
        self.time = 0.0
        self.running = True
        self.paused = False

    def stop(self) -> None:
        self.running = False

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def clamp(self, dt: float) -> float:
        return max(0.0, min(float(dt), self.max_delta))

    def tick(self, dt: float) -> Optional[float]:
        """
        Advance time by clamp(dt) and run every stage in order.
        Returns the applied delta, or None when stopped or paused.
        """
        if not self.running or self.paused:
            return None
        dt = self.clamp(dt)
        self.time += dt
        for _name, stage in self.stages:
            stage(dt, self.time)
        return dt
