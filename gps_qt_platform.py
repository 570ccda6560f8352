# gps_qt_platform.py
"""
PositionProvider backed by QtPositioning and Qt's permission API.

One QGeoPositionInfoSource is kept per source class: the precise one prefers
satellite positioning methods, the approximate one non-satellite methods.
Plugins can be pinned in the settings; when no precise plugin is set and a
USB receiver is plugged in, the 'nmea' plugin reads it directly.

All Qt signals arrive on the thread that owns the provider (the GUI
thread), so sample delivery is serialised by the event loop.
"""
from __future__ import annotations

import platform
import time
from typing import Callable, Optional

from PySide6.QtCore import QCoreApplication, QLocationPermission, QObject, Qt
from PySide6.QtPositioning import QGeoPositionInfo, QGeoPositionInfoSource

import shared
from gps_serial import nmea_source_parameters
from gps_throttle import OrThrottle
from gps_types import (
    PositionProvider,
    PositionSample,
    PositionSource,
    PositionUpdateSink,
    Subscription,
    SubscriptionFailed,
)
from shared import logger

PositioningMethod = QGeoPositionInfoSource.PositioningMethod
SourceError = QGeoPositionInfoSource.Error

METHODS = {
    PositionSource.PRECISE: PositioningMethod.SatellitePositioningMethods,
    PositionSource.APPROXIMATE: PositioningMethod.NonSatellitePositioningMethods,
}

ACCURACY = {
    PositionSource.PRECISE: QLocationPermission.Accuracy.Precise,
    PositionSource.APPROXIMATE: QLocationPermission.Accuracy.Approximate,
}

ERROR_MESSAGES = {
    SourceError.AccessError: "Location permission required",
    SourceError.ClosedError: "Location source was closed",
    SourceError.UnknownSourceError: "Unknown location source error",
}

SETTINGS_URLS = {
    "Darwin": "x-apple.systempreferences:com.apple.preference.security?Privacy_LocationServices",
    "Windows": "ms-settings:privacy-location",
}


def sample_from_info(source: PositionSource, info) -> Optional[PositionSample]:
    """Convert a QGeoPositionInfo; invalid infos give None."""
    if info is None or not info.isValid():
        return None

    coord = info.coordinate()
    accuracy = 0.0
    if info.hasAttribute(QGeoPositionInfo.Attribute.HorizontalAccuracy):
        accuracy = float(info.attribute(QGeoPositionInfo.Attribute.HorizontalAccuracy))

    ts = info.timestamp()
    observed_at = ts.toMSecsSinceEpoch() / 1000.0 if ts.isValid() else time.time()

    return PositionSample(
        source=source,
        latitude=float(coord.latitude()),
        longitude=float(coord.longitude()),
        accuracy_m=accuracy,
        observed_at=observed_at,
    )


def location_permission(source: PositionSource) -> QLocationPermission:
    perm = QLocationPermission()
    perm.setAccuracy(ACCURACY[source])
    perm.setAvailability(QLocationPermission.Availability.WhenInUse)
    return perm


def permission_answer(status) -> Optional[bool]:
    """Granted -> True, Denied -> False, still undetermined (dismissed) -> None."""
    if status == Qt.PermissionStatus.Granted:
        return True
    if status == Qt.PermissionStatus.Denied:
        return False
    return None


class QtSubscription(Subscription):

    def __init__(self, source: PositionSource, geo_source, throttle: OrThrottle, sink: PositionUpdateSink):
        super().__init__(source)
        self._geo_source = geo_source
        self._throttle = throttle
        self._sink = sink

        geo_source.positionUpdated.connect(self._on_position)
        geo_source.errorOccurred.connect(self._on_error)

    def start(self) -> None:
        # The throttle does the interval/distance filtering, so ask Qt for
        # every update it has.
        self._geo_source.setUpdateInterval(0)
        self._geo_source.startUpdates()

    def cancel(self) -> None:
        try:
            self._geo_source.stopUpdates()
        finally:
            self._disconnect()

    def _disconnect(self) -> None:
        for signal, slot in ((self._geo_source.positionUpdated, self._on_position),
                             (self._geo_source.errorOccurred, self._on_error)):
            try:
                signal.disconnect(slot)
            except (RuntimeError, TypeError):
                pass  # already disconnected

    def _on_position(self, info) -> None:
        sample = sample_from_info(self.source, info)
        if sample is None:
            return
        if self._throttle.allow(sample):
            self._sink.on_sample(sample)

    def _on_error(self, error) -> None:
        if error == SourceError.NoError:
            return
        if error == SourceError.UpdateTimeoutError:
            # no fix within the interval; the source keeps trying
            logger.debug(f"{self.source.provider_name} update timed out")
            return
        self._sink.on_error(ERROR_MESSAGES.get(error, f"Location error {error}"))


class QtPositionProvider(QObject, PositionProvider):

    def __init__(self, parent=None):
        super().__init__(parent)
        self._geo_sources: dict = {}

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def _plugin_for(self, source: PositionSource):
        plugin = shared.precise_plugin if source is PositionSource.PRECISE else shared.approximate_plugin
        params = {}
        if source is PositionSource.PRECISE and not plugin:
            # a USB receiver can be plugged in or pulled between checks
            nmea = nmea_source_parameters()
            if nmea:
                plugin, params = "nmea", nmea
        return plugin, params

    def _geo_source(self, source: PositionSource):
        plugin, params = self._plugin_for(source)
        key = (plugin, tuple(sorted(params.items())))

        cached = self._geo_sources.get(source)
        if cached is not None and cached[0] == key:
            return cached[1]

        if plugin:
            geo = QGeoPositionInfoSource.createSource(plugin, params, self)
        else:
            geo = QGeoPositionInfoSource.createDefaultSource(self)

        if geo is None:
            # not cached, the next check asks the platform again
            self._geo_sources.pop(source, None)
            logger.warning(f"   👆 No positioning plugin for {source.provider_name} "
                           f"({plugin or 'default'}); available: {QGeoPositionInfoSource.availableSources()}")
            return None

        geo.setPreferredPositioningMethods(METHODS[source])
        logger.info(f"   ✅ {source.provider_name} source uses plugin '{geo.sourceName()}'")

        self._geo_sources[source] = (key, geo)
        return geo

    def is_source_enabled(self, source: PositionSource) -> bool:
        geo = self._geo_source(source)
        if geo is None:
            return False
        # Platforms report no methods while location is switched off
        return bool(geo.supportedPositioningMethods() & METHODS[source])

    def subscribe(self, source: PositionSource, min_interval_ms: int, min_distance_m: float,
                  sink: PositionUpdateSink) -> Subscription:
        geo = self._geo_source(source)
        if geo is None:
            raise SubscriptionFailed(source, "no positioning plugin available")

        sub = QtSubscription(source, geo, OrThrottle(min_interval_ms, min_distance_m), sink)
        sub.start()
        return sub

    def last_known(self, source: PositionSource) -> Optional[PositionSample]:
        geo = self._geo_source(source)
        if geo is None:
            return None
        satellite_only = source is PositionSource.PRECISE
        return sample_from_info(source, geo.lastKnownPosition(satellite_only))

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------

    def is_capability_granted(self, source: PositionSource) -> bool:
        app = QCoreApplication.instance()
        if app is None:
            return False
        return app.checkPermission(location_permission(source)) == Qt.PermissionStatus.Granted

    def request_permission(self, callback: Callable[[Optional[bool]], None]) -> None:
        app = QCoreApplication.instance()
        if app is None:
            callback(False)
            return

        def answered(permission):
            callback(permission_answer(permission.status()))

        # Asking for precise covers approximate on every platform Qt supports
        app.requestPermission(location_permission(PositionSource.PRECISE), self, answered)

    # ------------------------------------------------------------------
    # Settings escape hatch
    # ------------------------------------------------------------------

    def open_location_settings(self) -> None:
        from qt_compat import QDesktopServices, QUrl

        url = SETTINGS_URLS.get(platform.system())
        if not url:
            logger.warning("   👆 Open your desktop's privacy settings to enable location services")
            return
        if not QDesktopServices.openUrl(QUrl(url)):
            logger.error(f"  ❌ Could not open location settings ({url})")
