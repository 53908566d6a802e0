# mars_cleanup/sim/engine.py
from __future__ import annotations
from typing import Callable, Mapping, Optional, Union
import time

from .models import RunParameters, RunRecord
from .world import World
from .route import is_permutation
from .live import LiveSim, SimState, TickFrame
from .config import FIELD, HOST, FieldConfig


def simulate_run(params: Union[RunParameters, Mapping],
                 field: FieldConfig = FIELD,
                 on_tick: Optional[Callable[[TickFrame], None]] = None,
                 clock: Callable[[], float] = time.perf_counter,
                 max_ticks: int = HOST.max_ticks) -> RunRecord:
    """Run one cleanup headlessly, as fast as possible, and return its record."""
    records = []
    live = LiveSim(World(field.width, field.height, field.padding), clock=clock,
                   on_tick=on_tick, on_complete=records.append)
    live.start(params)

    try:
        for _ in range(int(max_ticks)):
            live.tick()
            if live.state is SimState.COMPLETE:
                break
        else:
            raise RuntimeError(f"run did not complete within {max_ticks} ticks")
        check_completed(live)
        return records[0]
    finally:
        live.dispose()


def check_completed(live: LiveSim) -> None:
    """Raise RuntimeError unless the run visited every point exactly once."""
    n = len(live.points)
    if not is_permutation(live.order, n):
        raise RuntimeError(f"visiting order is not a permutation of {n} points")
    left = live.world.uncollected()
    if left:
        raise RuntimeError(f"{len(left)} of {n} points left uncollected")
    if live.snapshot().collected_count != n:
        raise RuntimeError(f"collected {live.snapshot().collected_count} of {n} points")
