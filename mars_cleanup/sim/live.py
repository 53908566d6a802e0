# mars_cleanup/sim/live.py
from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence, Tuple, Union
import logging
import math
import time

from .models import AgentState, Metrics, Point, RunParameters, RunRecord, Vec
from .world import World
from .route import nearest_neighbor_order
from .agent import AgentController, TickOutcome
from .metrics import MetricsAggregator

logger = logging.getLogger(__name__)


class SimState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TickFrame:
    """What the renderer gets after each processed tick."""
    tick: int
    agent: AgentState
    trail: Tuple[Vec, ...]
    points: Sequence[Point]     # live list, read-only outside the controller
    state: SimState


class LiveSim:
    """
    Tick-driven wrapper around one cleanup run.

    Idle -> Running on `start`, Running -> Complete once the route is
    exhausted, and back to Idle on `reset`. The host calls `tick()` (or a
    callable from `tick_callback()`) once per frame; ticks outside a live
    run are ignored.
    """
    def __init__(self, world: Optional[World] = None,
                 clock: Callable[[], float] = time.perf_counter,
                 on_tick: Optional[Callable[[TickFrame], None]] = None,
                 on_complete: Optional[Callable[[RunRecord], None]] = None):
        self.world = world if world is not None else World()
        self.metrics = MetricsAggregator(clock=clock)
        self.on_tick = on_tick
        self.on_complete = on_complete

        self.state = SimState.IDLE
        self.params: Optional[RunParameters] = None
        self.order: Tuple[int, ...] = ()
        self.agent: Optional[AgentController] = None
        self.ticks = 0
        self._generation = 0
        self._completion_sent = False
        self._disposed = False

    # ---------------- lifecycle ----------------
    def start(self, params: Union[RunParameters, Mapping]) -> None:
        if self._disposed:
            raise RuntimeError("simulation has been disposed")
        if not isinstance(params, RunParameters):
            params = RunParameters(**params)   # raises InvalidConfiguration
        if self.state is not SimState.IDLE:
            self.reset()

        points = self.world.spawn_points(params.point_count, params.seed)
        self.order = tuple(nearest_neighbor_order(points))
        self.agent = AgentController(points, self.order)
        self.params = params
        self.ticks = 0
        self._completion_sent = False
        self._generation += 1
        self.metrics.start()
        self.state = SimState.RUNNING
        logger.info(f"run started: points={params.point_count} "
                    f"speed={params.speed_factor} seed={params.seed}")

    def reset(self) -> None:
        self._generation += 1
        self.state = SimState.IDLE
        self.params = None
        self.order = ()
        self.agent = None
        self.ticks = 0
        self._completion_sent = False
        self.world.clear()
        self.metrics.reset()
        logger.debug("simulation reset")

    def dispose(self) -> None:
        self.reset()
        self.on_tick = None
        self.on_complete = None
        self._disposed = True

    # ---------------- ticking ----------------
    def tick(self, dt: float = 1.0) -> Optional[TickOutcome]:
        if self.state is not SimState.RUNNING or self.agent is None:
            logger.debug(f"tick ignored in state {self.state.value}")
            return None

        if not (math.isfinite(dt) and dt > 0):
            raise ValueError(f"dt must be finite and > 0, got {dt!r}")

        generation = self._generation
        outcome = self.agent.advance(dt, self.params.speed_factor)
        self.ticks += 1
        if outcome.complete:
            self.state = SimState.COMPLETE
            self.metrics.mark_complete()
        else:
            self.metrics.record_tick(outcome.collected, outcome.distance)

        # last frame goes out before the completion signal; either observer
        # may reset or restart, which retires this run
        if self.on_tick is not None:
            self.on_tick(self.frame())
        if outcome.complete and generation == self._generation:
            self._notify_complete()
        return outcome

    def tick_callback(self) -> Callable[..., Optional[TickOutcome]]:
        """A per-frame callable that goes inert once this run is reset or replaced."""
        generation = self._generation

        def _tick(dt: float = 1.0) -> Optional[TickOutcome]:
            if generation != self._generation:
                logger.debug("stale tick callback ignored")
                return None
            return self.tick(dt)

        return _tick

    def _notify_complete(self) -> None:
        if self._completion_sent:
            return
        self._completion_sent = True
        m = self.metrics.snapshot()
        logger.info(f"run complete: collected={m.collected_count} "
                    f"distance={m.total_distance:.1f} time={m.elapsed_seconds:.2f}s")
        if self.on_complete is not None:
            self.on_complete(self.run_record())

    # ---------------- observers ----------------
    @property
    def points(self) -> List[Point]:
        return self.world.points

    @property
    def trail(self) -> Tuple[Vec, ...]:
        return tuple(self.agent.trail) if self.agent is not None else ()

    def snapshot(self) -> Metrics:
        return self.metrics.snapshot()

    def frame(self) -> Optional[TickFrame]:
        if self.agent is None:
            return None
        return TickFrame(
            tick=self.ticks,
            agent=replace(self.agent.state),
            trail=self.trail,
            points=self.points,
            state=self.state,
        )

    def run_record(self) -> RunRecord:
        if self.params is None:
            raise RuntimeError("no run has been started")
        return RunRecord(params=self.params, metrics=self.snapshot(),
                         timestamp=datetime.now(timezone.utc))
