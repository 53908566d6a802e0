# mars_cleanup/ui/app.py
from __future__ import annotations
from typing import Callable, List, Mapping, Optional, Union
import logging
import time

from ..sim.config import HOST
from ..sim.live import LiveSim, TickFrame
from ..sim.models import Metrics, RunParameters, RunRecord

logger = logging.getLogger(__name__)


def run_live(params: Union[RunParameters, Mapping],
             fps: int = HOST.fps,
             poll_interval: float = HOST.poll_interval,
             on_poll: Optional[Callable[[Metrics], None]] = None,
             on_tick: Optional[Callable[[TickFrame], None]] = None,
             clock: Callable[[], float] = time.monotonic,
             sleep: Callable[[float], None] = time.sleep,
             max_ticks: int = HOST.max_ticks) -> RunRecord:
    """
    Real-time host: one tick per frame at `fps`, metrics polled every
    `poll_interval` seconds, like the browser view this replaces.
    Returns the record handed over on completion.
    """
    if fps <= 0 or poll_interval <= 0:
        raise ValueError("fps and poll_interval must be > 0")

    done: List[RunRecord] = []
    live = LiveSim(clock=clock, on_tick=on_tick, on_complete=done.append)
    live.start(params)
    tick = live.tick_callback()

    frame_dt = 1.0 / fps
    next_frame = clock()
    next_poll = next_frame + poll_interval
    try:
        for _ in range(int(max_ticks)):
            now = clock()
            if now < next_frame:
                sleep(next_frame - now)
            # never queue up catch-up frames after a stall
            next_frame = max(next_frame + frame_dt, now)

            tick()
            polled_at = clock()
            if done or polled_at >= next_poll:
                if on_poll is not None:
                    on_poll(live.snapshot())
                # next poll is a full interval after this one, even after a stall
                next_poll = max(next_poll, polled_at) + poll_interval
            if done:
                break
        else:
            raise RuntimeError(f"run did not complete within {max_ticks} frames")
    finally:
        live.dispose()

    logger.info(f"live run finished after {done[0].metrics.elapsed_seconds:.2f}s")
    return done[0]
