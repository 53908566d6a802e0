# mars_cleanup/sim/agent.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Sequence, Tuple
import logging
import math

from .models import AgentState, Point, Vec
from .config import AGENT

logger = logging.getLogger(__name__)


class TickKind(Enum):
    MOVED = "moved"
    ARRIVED = "arrived"
    COMPLETE = "complete"


@dataclass(frozen=True)
class TickOutcome:
    kind: TickKind
    distance: float = 0.0           # leg length, arrivals only
    point_index: Optional[int] = None

    @property
    def collected(self) -> bool:
        return self.kind is TickKind.ARRIVED

    @property
    def complete(self) -> bool:
        return self.kind is TickKind.COMPLETE


class AgentController:
    """
    Moves the agent along a fixed visiting order, one step per tick.

    The point list is shared with the rest of the run; this class is its only
    writer (collected flag and decay fields on arrival).
    """
    def __init__(self, points: Sequence[Point], order: Sequence[int],
                 entry: Vec = (AGENT.entry_x, AGENT.entry_y),
                 base_speed: float = AGENT.base_speed,
                 trail_length: int = AGENT.trail_length):
        self.points = points
        self.order: Tuple[int, ...] = tuple(order)
        self.base_speed = base_speed
        self.state = AgentState(x=entry[0], y=entry[1], last_x=entry[0], last_y=entry[1])
        self.trail: Deque[Vec] = deque(maxlen=trail_length)
        self.target_index = 0

    @property
    def done(self) -> bool:
        return self.target_index >= len(self.order)

    @property
    def remaining(self) -> int:
        return max(len(self.order) - self.target_index, 0)

    @property
    def progress(self) -> float:
        if not self.order:
            return 1.0
        return min(self.target_index / len(self.order), 1.0)

    @property
    def target(self) -> Optional[Point]:
        if self.done:
            return None
        return self.points[self.order[self.target_index]]

    def trail_points(self) -> List[Vec]:
        return list(self.trail)

    def step_size(self, speed_factor: float, dt: float = 1.0) -> float:
        return self.base_speed * speed_factor * dt

    def advance(self, dt: float, speed_factor: float) -> TickOutcome:
        # skip anything already collected without spending the tick
        while not self.done and self.points[self.order[self.target_index]].collected:
            self.target_index += 1
        if self.done:
            return TickOutcome(TickKind.COMPLETE)

        step = self.step_size(speed_factor, dt)
        if not (math.isfinite(step) and step > 0):
            raise ValueError(f"step must be finite and > 0 (dt={dt!r}, speed={speed_factor!r})")

        idx = self.order[self.target_index]
        target = self.points[idx]
        me = self.state
        dx = target.x - me.x
        dy = target.y - me.y
        distance = math.hypot(dx, dy)

        # step > 0 here, so an agent already on its target always arrives
        if distance < step:
            # straight leg between consecutive stops
            leg = math.hypot(target.x - me.last_x, target.y - me.last_y)
            target.collected = True
            target.decay_alpha = AGENT.collect_alpha
            target.decay_scale = AGENT.collect_scale
            me.last_x, me.last_y = target.x, target.y
            self.target_index += 1
            logger.debug(f"collected point #{idx} leg={leg:.2f} "
                         f"({self.target_index}/{len(self.order)})")
            return TickOutcome(TickKind.ARRIVED, distance=leg, point_index=idx)

        me.x += dx / distance * step
        me.y += dy / distance * step
        self.trail.append(me.pos())
        return TickOutcome(TickKind.MOVED, point_index=idx)
