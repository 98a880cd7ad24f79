#!/usr/bin/env python3
"""
Bounded per-body history of rendered positions.
"""
from collections import deque
from typing import Deque, List, Optional

from .constants import DEFAULT_TRAIL_CAPACITY
from .vector_utils import Vec3, as_vec3


class TrailHistory:
    """
    FIFO of display-space points, oldest first.

    Points are stored as they were recorded; changing the distance scale later
    does not rescale them.
    """

    def __init__(self, capacity: int = DEFAULT_TRAIL_CAPACITY):
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError(f"trail capacity must be at least 1, got {capacity}")
        self._points: Deque[Vec3] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def record(self, point: Vec3) -> None:
        """Append a point, evicting the oldest one when full."""
        self._points.append(as_vec3(point))

    def positions(self) -> List[Vec3]:
        return list(self._points)

    def latest(self) -> Optional[Vec3]:
        if not self._points:
            return None
        return self._points[-1]

    def clear(self) -> None:
        self._points.clear()

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        return f"TrailHistory(len={len(self)}, capacity={self.capacity})"
