# mars_cleanup/sim/world.py
from __future__ import annotations
from typing import List

from .models import Point, InvalidConfiguration
from .rng import LCG
from .config import FIELD, AGENT


def generate_points(count: int, seed: int,
                    width: float = FIELD.width,
                    height: float = FIELD.height,
                    padding: float = FIELD.padding) -> List[Point]:
    """
    Scatter `count` points inside the padded rectangle.

    One LCG per call; each point draws x then y, in index order.
    """
    if count <= 0:
        raise InvalidConfiguration("point count must be > 0")
    usable_w = width - 2 * padding
    usable_h = height - 2 * padding
    if usable_w <= 0 or usable_h <= 0:
        raise InvalidConfiguration(
            f"usable area is empty ({width}x{height} with padding {padding})")

    rng = LCG(seed)
    points: List[Point] = []
    for _ in range(count):
        x = padding + rng.next() * usable_w
        y = padding + rng.next() * usable_h
        points.append(Point(x=x, y=y, collected=False,
                            decay_alpha=AGENT.spawn_alpha,
                            decay_scale=AGENT.spawn_scale))
    return points


class World:
    def __init__(self, width: float = FIELD.width, height: float = FIELD.height,
                 padding: float = FIELD.padding):
        self.width = width
        self.height = height
        self.padding = padding
        self.points: List[Point] = []

    def spawn_points(self, n: int, seed: int) -> List[Point]:
        self.points = generate_points(n, seed, self.width, self.height, self.padding)
        return self.points

    def clear(self) -> None:
        self.points = []

    # --- queries ---
    def uncollected(self) -> List[Point]:
        return [p for p in self.points if not p.collected]

