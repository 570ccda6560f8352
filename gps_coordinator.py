# gps_coordinator.py
"""
LocationCoordinator: turns a user's "get location" request into one stream
of presentation statuses.

    IDLE -> CHECKING_SOURCES -> AWAITING_AUTHORIZATION -> ACQUIRING -> IDLE

Rules:
- Source availability is checked once per start(); nothing is re-polled
  while acquiring.
- Both enabled sources are subscribed at the same time (precise first).
  Whichever sample arrives last is the current location.
- A last-known sample (precise, else approximate) is pushed before any live
  update. Without one the sink is told we are searching.
- Authorization is a two-step exchange: start() asks, and
  on_authorization_result() picks up where start() left off.
- stop() tears everything down and never raises. Samples that trickle in
  afterwards are dropped.
"""
from __future__ import annotations

import threading
from typing import Optional

import shared
from gps_auth import AuthorizationGate
from gps_merge import CurrentLocation, merge
from gps_sources import SourceAvailability
from gps_types import (
    AllSourcesDisabled,
    AuthorizationDenied,
    AuthorizationPending,
    AuthorizationState,
    CoordinatorState,
    Fix,
    PositionProvider,
    PositionSample,
    PositionSource,
    PositionUpdateSink,
    Searching,
    SOURCE_ORDER,
    Subscription,
    SubscriptionError,
    SubscriptionFailed,
)
from shared import logger


class LocationCoordinator:

    def __init__(self, provider: PositionProvider, sink, min_interval_ms: Optional[int] = None,
                 min_distance_m: Optional[float] = None):
        self.provider = provider
        self.sink = sink    # anything with present(status)
        self.gate = AuthorizationGate(provider)
        self.availability = SourceAvailability(provider)

        self.min_interval_ms = shared.gps_min_interval_ms if min_interval_ms is None else int(min_interval_ms)
        self.min_distance_m = shared.gps_min_distance_m if min_distance_m is None else float(min_distance_m)

        # Qt already serialises callbacks on the GUI thread; the lock keeps
        # the same guarantee for providers that deliver from other threads.
        self._lock = threading.RLock()

        self._state = CoordinatorState.IDLE
        self._location: Optional[CurrentLocation] = None
        self._enabled: list[PositionSource] = []
        self._live: set[PositionSource] = set()
        self._subscriptions: dict[PositionSource, Subscription] = {}

        # Bumped on every acquisition start and stop so late callbacks from an
        # older session can be recognised and dropped.
        self._session = 0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> CoordinatorState:
        with self._lock:
            return self._state

    @property
    def current_location(self) -> Optional[PositionSample]:
        with self._lock:
            return self._location.sample if self._location is not None else None

    @property
    def active_sources(self) -> tuple:
        with self._lock:
            return tuple(src for src in SOURCE_ORDER if src in self._subscriptions)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            if self._state is CoordinatorState.AWAITING_AUTHORIZATION:
                logger.warning("   👆 Still waiting for location permission, ignoring start()")
                return

            if self._state is CoordinatorState.ACQUIRING:
                logger.info("   👆 Restarting location acquisition")
                self.stop()

            self._state = CoordinatorState.CHECKING_SOURCES
            enabled = self.availability.enabled_sources()

            if not enabled:
                logger.warning("   👆 All location sources are disabled")
                self._state = CoordinatorState.IDLE
                self._emit(AllSourcesDisabled())
                return

            self._enabled = enabled

            if self.gate.check_authorization() is AuthorizationState.GRANTED:
                self._begin_acquiring()
                return

            self._state = CoordinatorState.AWAITING_AUTHORIZATION
            try:
                self.gate.request_authorization(self.on_authorization_result)
            except AuthorizationPending:
                # prompt from an earlier start() is still open, its answer lands here
                logger.info("   👆 Waiting on the open location permission prompt")

    def stop(self) -> None:
        with self._lock:
            self._session += 1

            handles = list(self._subscriptions.values())
            self._subscriptions.clear()
            self._live.clear()

            for handle in handles:
                self._cancel(handle)

            if self._location is not None:
                self._location.clear()
            self._location = None
            self._enabled = []

            if self._state is not CoordinatorState.IDLE:
                logger.info("   ✅ Location acquisition stopped")
            self._state = CoordinatorState.IDLE

    # ------------------------------------------------------------------
    # AuthorizationResultSink
    # ------------------------------------------------------------------

    def on_authorization_result(self, result: AuthorizationState) -> None:
        with self._lock:
            if self._state is not CoordinatorState.AWAITING_AUTHORIZATION:
                logger.warning(f"   👆 Late permission result '{result.value}' ignored")
                return

            if result is AuthorizationState.GRANTED:
                self._begin_acquiring()
                return

            logger.warning("   👆 Location permission denied")
            self._enabled = []
            self._state = CoordinatorState.IDLE
            self._emit(AuthorizationDenied())

    # ------------------------------------------------------------------
    # PositionUpdateSink
    # ------------------------------------------------------------------

    def on_sample_received(self, sample: PositionSample) -> None:
        with self._lock:
            if self._state is not CoordinatorState.ACQUIRING or self._location is None:
                logger.debug(f"Dropping {sample.source.provider_name} sample, not acquiring")
                return

            accepted = merge(sample, self._location.sample).sample
            self._location.replace(accepted)

            logger.info(
                f"   ✅ Location updated ({accepted.source.provider_name}) "
                f"{accepted.latitude:.6f},{accepted.longitude:.6f} ±{accepted.accuracy_m:.1f}m"
            )
            self._emit(Fix.from_sample(accepted))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin_acquiring(self) -> None:
        self._state = CoordinatorState.ACQUIRING
        self._session += 1
        self._location = CurrentLocation()

        for source in self._enabled:
            if self._state is not CoordinatorState.ACQUIRING:
                return  # sink stopped us while subscribing
            self._subscribe(source)

        if self._state is CoordinatorState.ACQUIRING:
            self._read_last_known()

    def _subscribe(self, source: PositionSource) -> None:
        session = self._session
        updates = PositionUpdateSink(
            on_sample=lambda sample: self._deliver(session, source, sample),
            on_error=lambda message: self._subscription_failed(session, source, message),
        )

        # Marked live before subscribing; some providers deliver synchronously
        self._live.add(source)
        try:
            handle = self.provider.subscribe(source, self.min_interval_ms, self.min_distance_m, updates)
        except SubscriptionFailed as e:
            self._live.discard(source)
            self._report_subscription_error(source, e.message)
            return
        except Exception as e:
            self._live.discard(source)
            self._report_subscription_error(source, str(e))
            return

        if session == self._session and source in self._live:
            self._subscriptions[source] = handle
            logger.info(f"   ✅ Subscribed to {source.provider_name} updates")
        else:
            # failed or stopped while subscribing
            self._cancel(handle)

    def _read_last_known(self) -> None:
        sample = None
        for source in SOURCE_ORDER:
            if source not in self._enabled:
                continue
            logger.debug(f"Trying {source.provider_name} last location")
            try:
                sample = self.provider.last_known(source)
            except Exception as e:
                logger.warning(f"   👆 Last known {source.provider_name} location unavailable: {e}")
                sample = None
            if sample is not None:
                break

        if sample is not None:
            logger.info("   ✅ Initial location found")
            self.on_sample_received(sample)
        else:
            logger.info("   👆 No initial location available")
            self._emit(Searching())

    def _deliver(self, session: int, source: PositionSource, sample: PositionSample) -> None:
        with self._lock:
            if session != self._session or source not in self._live:
                logger.debug(f"Dropping sample from stale {source.provider_name} subscription")
                return
            self.on_sample_received(sample)

    def _subscription_failed(self, session: int, source: PositionSource, message: str) -> None:
        with self._lock:
            if session != self._session or source not in self._live:
                return
            self._live.discard(source)
            handle = self._subscriptions.pop(source, None)
            if handle is not None:
                self._cancel(handle)
            self._report_subscription_error(source, message)

    def _report_subscription_error(self, source: PositionSource, message: str) -> None:
        logger.error(f"  ❌ {source.provider_name} subscription failed: {message}")
        self._emit(SubscriptionError(source, message))

    def _cancel(self, handle: Subscription) -> None:
        try:
            handle.cancel()
        except Exception as e:
            # typically permission revoked since subscribing
            logger.warning(f"   👆 Could not unsubscribe {handle.source.provider_name}: {e}")

    def _emit(self, status) -> None:
        try:
            self.sink.present(status)
        except Exception as e:
            logger.exception(f"  ❌ Presentation failed for {type(status).__name__}: {e}")
