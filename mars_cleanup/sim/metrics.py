# mars_cleanup/sim/metrics.py
from __future__ import annotations
from typing import Callable, Dict, Optional
import time

from .models import Metrics, RunRecord
from .config import METRICS


class MetricsAggregator:
    """
    Running totals for one run.

    Counters only grow while a run is active; elapsed time is recomputed from
    the clock on every update and frozen by `mark_complete`. `snapshot()`
    hands out an immutable `Metrics`, so readers never see a half update.
    """
    def __init__(self, clock: Callable[[], float] = time.perf_counter,
                 energy_factor: float = METRICS.energy_factor):
        self._clock = clock
        self.energy_factor = energy_factor
        self.reset()

    def reset(self) -> None:
        self.collected_count = 0
        self.total_distance = 0.0
        self.tick_events = 0
        self.elapsed_seconds = 0.0
        self.energy_estimate = 0.0
        self.start_time: Optional[float] = None
        self.complete = False

    def start(self) -> None:
        self.reset()
        self.start_time = self._clock()

    @property
    def running(self) -> bool:
        return self.start_time is not None and not self.complete

    def _update_elapsed(self) -> None:
        if self.start_time is not None:
            self.elapsed_seconds = max(self._clock() - self.start_time, 0.0)

    def record_tick(self, collected: bool, distance: float) -> None:
        if collected:
            self.collected_count += 1
        if distance > 0:
            self.total_distance += distance
            self.tick_events += 1
        if self.running:
            self._update_elapsed()
        self.energy_estimate = self.total_distance * self.energy_factor

    def mark_complete(self) -> None:
        if self.running:
            self._update_elapsed()
        self.complete = True

    def snapshot(self) -> Metrics:
        return Metrics(
            collected_count=self.collected_count,
            total_distance=self.total_distance,
            tick_events=self.tick_events,
            elapsed_seconds=self.elapsed_seconds,
            energy_estimate=self.energy_estimate,
        )


def summarize_run(record: RunRecord) -> Dict[str, float]:
    p, m = record.params, record.metrics
    return dict(
        point_count=p.point_count, speed_factor=p.speed_factor, seed=p.seed,
        collected=m.collected_count, total_distance=m.total_distance,
        steps=m.tick_events, time_s=m.elapsed_seconds, energy=m.energy_estimate,
        mean_leg=m.total_distance / max(m.tick_events, 1),
    )
