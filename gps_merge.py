# gps_merge.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gps_types import PositionSample


@dataclass(frozen=True)
class Accept:
    sample: PositionSample


def merge(incoming: PositionSample, current: Optional[PositionSample] = None) -> Accept:
    """
    Decide whether `incoming` becomes the current location.

    Last writer wins: every sample is accepted, whatever its source,
    accuracy or timestamp compared to `current`. A less accurate sample
    that arrives later still replaces a better one.
    """
    return Accept(incoming)


class CurrentLocation:
    """The one accepted sample owned by a coordinator, or no fix yet."""

    def __init__(self):
        self._sample: Optional[PositionSample] = None

    @property
    def sample(self) -> Optional[PositionSample]:
        return self._sample

    @property
    def has_fix(self) -> bool:
        return self._sample is not None

    def replace(self, sample: PositionSample) -> None:
        self._sample = sample

    def clear(self) -> None:
        self._sample = None
