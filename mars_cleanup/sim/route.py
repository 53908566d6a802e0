# mars_cleanup/sim/route.py
from __future__ import annotations
from typing import List, Optional, Sequence
import math

import numpy as np

from .models import Point, Vec


def nearest_neighbor_order(points: Sequence[Point]) -> List[int]:
    """
    Greedy nearest-neighbour visiting order over `points`.

    Always starts at index 0. From the last appended point, the closest
    unvisited point is appended next; among equal distances the lowest
    index wins (unvisited indices stay in ascending order and argmin
    returns the first minimum). O(n^2), not tour-optimal.
    """
    n = len(points)
    if n == 0:
        return []
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=n)
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=n)

    order = [0]
    unvisited = np.arange(1, n)
    while unvisited.size:
        cur = order[-1]
        d = np.hypot(xs[unvisited] - xs[cur], ys[unvisited] - ys[cur])
        k = int(np.argmin(d))
        order.append(int(unvisited[k]))
        unvisited = np.delete(unvisited, k)
    return order


def route_length(points: Sequence[Point], order: Sequence[int],
                 start: Optional[Vec] = None) -> float:
    """Sum of straight legs along `order`, optionally from `start` to the first stop."""
    total = 0.0
    prev = start
    for idx in order:
        p = points[idx]
        if prev is not None:
            total += math.hypot(p.x - prev[0], p.y - prev[1])
        prev = (p.x, p.y)
    return total


def is_permutation(order: Sequence[int], n: int) -> bool:
    return len(order) == n and sorted(order) == list(range(n))
