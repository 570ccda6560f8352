# gps_throttle.py
from __future__ import annotations

from math import asin, cos, radians, sin, sqrt
from typing import Optional

from gps_types import PositionSample

EARTH_RADIUS_M = 6_371_000


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters."""
    p1 = radians(lat1)
    p2 = radians(lat2)
    dlat = p2 - p1
    dlon = radians(lon2) - radians(lon1)

    h = sin(dlat / 2) ** 2 + cos(p1) * cos(p2) * sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * asin(sqrt(h))


class OrThrottle:
    """
    Lets a live sample through when EITHER the minimum interval has passed
    OR the device moved at least the minimum distance since the last sample
    that was let through. The first sample always passes.
    """

    def __init__(self, min_interval_ms: int = 1000, min_distance_m: float = 1.0):
        self.min_interval_s = max(0, int(min_interval_ms)) / 1000.0
        self.min_distance_m = max(0.0, float(min_distance_m))
        self._last: Optional[PositionSample] = None

    def allow(self, sample: PositionSample) -> bool:
        last = self._last
        if last is None:
            self._last = sample
            return True

        elapsed = sample.observed_at - last.observed_at
        moved = haversine_m(last.latitude, last.longitude, sample.latitude, sample.longitude)

        if elapsed >= self.min_interval_s or moved >= self.min_distance_m:
            self._last = sample
            return True
        return False

    def reset(self) -> None:
        self._last = None
