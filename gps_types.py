# gps_types.py
"""
Value types shared by the location core.

Nothing in here talks to Qt or to the platform; the coordinator, the
authorization gate and the platform adapters all exchange these.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional


class PositionSource(enum.Enum):
    PRECISE = "precise"            # satellite based, high power
    APPROXIMATE = "approximate"    # network / wifi derived

    @property
    def provider_name(self) -> str:
        """Short name shown to the user, e.g. 'gps' or 'network'."""
        return "gps" if self is PositionSource.PRECISE else "network"


# Fallback order for subscriptions and last-known reads
SOURCE_ORDER = (PositionSource.PRECISE, PositionSource.APPROXIMATE)


class AuthorizationState(enum.Enum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"


class CoordinatorState(enum.Enum):
    IDLE = "idle"
    CHECKING_SOURCES = "checking_sources"
    AWAITING_AUTHORIZATION = "awaiting_authorization"
    ACQUIRING = "acquiring"


@dataclass(frozen=True)
class PositionSample:
    source: PositionSource
    latitude: float
    longitude: float
    accuracy_m: float
    observed_at: float  # POSIX seconds


# ---------------------------------------------------------------------------
# Presentation statuses. These are the only payloads a sink ever receives.
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Searching:
    pass


@dataclass(frozen=True)
class Fix:
    latitude: float
    longitude: float
    accuracy_m: float
    source: PositionSource

    @classmethod
    def from_sample(cls, sample: PositionSample) -> "Fix":
        return cls(sample.latitude, sample.longitude, sample.accuracy_m, sample.source)


@dataclass(frozen=True)
class AllSourcesDisabled:
    pass


@dataclass(frozen=True)
class AuthorizationDenied:
    pass


@dataclass(frozen=True)
class SubscriptionError:
    source: PositionSource
    message: str


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class GpsError(Exception):
    """Base class for location errors."""


class AuthorizationPending(GpsError):
    """An authorization request is already waiting for an answer."""


class SubscriptionFailed(GpsError):
    def __init__(self, source: PositionSource, message: str):
        super().__init__(f"{source.provider_name}: {message}")
        self.source = source
        self.message = message


# ---------------------------------------------------------------------------
# Capability seams
# ---------------------------------------------------------------------------

# Receives exactly one GRANTED / DENIED per authorization request
AuthorizationResultSink = Callable[[AuthorizationState], None]


@dataclass(frozen=True)
class PositionUpdateSink:
    """Callbacks a live subscription delivers into."""
    on_sample: Callable[[PositionSample], None]
    on_error: Callable[[str], None]


class Subscription:
    """Handle for one live subscription. Providers subclass this."""

    def __init__(self, source: PositionSource):
        self.source = source

    def cancel(self) -> None:
        raise NotImplementedError


class PositionProvider:
    """
    What the core needs from the platform.

    Implementations: gps_qt_platform.QtPositionProvider for the desktop,
    and the fakes in tests/test_common.py.
    """

    def is_source_enabled(self, source: PositionSource) -> bool:
        raise NotImplementedError

    def is_capability_granted(self, source: PositionSource) -> bool:
        raise NotImplementedError

    def request_permission(self, callback: Callable[[Optional[bool]], None]) -> None:
        """Prompt once; callback gets True, False, or None if dismissed."""
        raise NotImplementedError

    def subscribe(
        self,
        source: PositionSource,
        min_interval_ms: int,
        min_distance_m: float,
        sink: PositionUpdateSink,
    ) -> Subscription:
        raise NotImplementedError

    def last_known(self, source: PositionSource) -> Optional[PositionSample]:
        raise NotImplementedError

    def open_location_settings(self) -> None:
        raise NotImplementedError
