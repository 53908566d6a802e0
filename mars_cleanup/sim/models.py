# mars_cleanup/sim/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Tuple
import math
import numbers

from .config import LIMITS

Vec = Tuple[float, float]


class InvalidConfiguration(ValueError):
    """Run parameters or field geometry that cannot produce a run."""


@dataclass
class Point:
    x: float
    y: float
    collected: bool = False
    # decay fields: set on collection, faded by the renderer
    decay_alpha: float = 255.0
    decay_scale: float = 1.0


def _as_seed(seed) -> int:
    if isinstance(seed, bool):
        raise InvalidConfiguration(f"seed must be an integer, got {seed!r}")
    if isinstance(seed, numbers.Integral):
        return int(seed)
    if isinstance(seed, numbers.Real):
        f = float(seed)
        if not math.isfinite(f) or not f.is_integer():
            raise InvalidConfiguration(f"seed must be a finite integer, got {seed!r}")
        return int(f)
    raise InvalidConfiguration(f"seed must be an integer, got {seed!r}")


@dataclass(frozen=True)
class RunParameters:
    point_count: int
    speed_factor: float
    seed: int

    def __post_init__(self) -> None:
        pc = self.point_count
        if isinstance(pc, bool) or not isinstance(pc, numbers.Integral):
            raise InvalidConfiguration(f"point_count must be an integer, got {pc!r}")
        if pc <= 0:
            raise InvalidConfiguration("point_count must be > 0")
        if pc > LIMITS.max_point_count:
            raise InvalidConfiguration(f"point_count must be <= {LIMITS.max_point_count}")

        sf = self.speed_factor
        if isinstance(sf, bool) or not isinstance(sf, numbers.Real):
            raise InvalidConfiguration(f"speed_factor must be a number, got {sf!r}")
        if not math.isfinite(sf) or sf <= 0:
            raise InvalidConfiguration("speed_factor must be finite and > 0")

        # normalise without breaking frozen
        object.__setattr__(self, "point_count", int(pc))
        object.__setattr__(self, "speed_factor", float(sf))
        object.__setattr__(self, "seed", _as_seed(self.seed))


@dataclass
class AgentState:
    x: float
    y: float
    last_x: float   # position of the last collection (or entry)
    last_y: float

    def pos(self) -> Vec:
        return (self.x, self.y)


@dataclass(frozen=True)
class Metrics:
    collected_count: int = 0
    total_distance: float = 0.0
    tick_events: int = 0
    elapsed_seconds: float = 0.0
    energy_estimate: float = 0.0


@dataclass(frozen=True)
class RunRecord:
    params: RunParameters
    metrics: Metrics
    timestamp: datetime

    def to_dict(self) -> dict:
        return dict(
            params=asdict(self.params),
            metrics=asdict(self.metrics),
            timestamp=self.iso_timestamp(),
        )

    def iso_timestamp(self) -> str:
        """UTC, millisecond precision, `Z` suffix: 2024-05-06T07:08:09.000Z"""
        utc = self.timestamp.astimezone(timezone.utc)
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")
