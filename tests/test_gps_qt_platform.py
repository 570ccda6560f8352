"""
Tests for the QtPositioning adapter, with QGeoPositionInfoSource replaced by
mocks so no positioning plugin or event loop is needed.
"""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock, patch

import shared
from gps_types import PositionUpdateSink, SubscriptionFailed

from .test_common import APPROXIMATE, PRECISE, make_sample

import gps_qt_platform as qtp
from gps_qt_platform import PositioningMethod, SourceError
from PySide6.QtCore import Qt


def make_info(lat=52.5, lon=13.4, accuracy=12.0, msecs=1_700_000_000_000, valid=True):
    info = MagicMock()
    info.isValid.return_value = valid
    info.coordinate.return_value.latitude.return_value = lat
    info.coordinate.return_value.longitude.return_value = lon
    info.hasAttribute.return_value = accuracy is not None
    info.attribute.return_value = accuracy
    info.timestamp.return_value.isValid.return_value = True
    info.timestamp.return_value.toMSecsSinceEpoch.return_value = msecs
    return info


def make_geo(methods=PositioningMethod.AllPositioningMethods, last=None):
    geo = MagicMock()
    geo.supportedPositioningMethods.return_value = methods
    geo.lastKnownPosition.return_value = last
    geo.sourceName.return_value = "fake"
    return geo


class TestConversions(unittest.TestCase):

    def test_sample_from_info(self):
        sample = qtp.sample_from_info(PRECISE, make_info())
        self.assertEqual(sample, make_sample(PRECISE, lat=52.5, lon=13.4, accuracy=12.0, t=1_700_000_000.0))

    def test_missing_accuracy_is_zero(self):
        self.assertEqual(qtp.sample_from_info(APPROXIMATE, make_info(accuracy=None)).accuracy_m, 0.0)

    def test_invalid_info(self):
        self.assertIsNone(qtp.sample_from_info(PRECISE, make_info(valid=False)))
        self.assertIsNone(qtp.sample_from_info(PRECISE, None))

    def test_permission_answer(self):
        self.assertIs(qtp.permission_answer(Qt.PermissionStatus.Granted), True)
        self.assertIs(qtp.permission_answer(Qt.PermissionStatus.Denied), False)
        self.assertIsNone(qtp.permission_answer(Qt.PermissionStatus.Undetermined))


class TestQtSubscription(unittest.TestCase):

    def setUp(self):
        self.geo = make_geo()
        self.samples = []
        self.errors = []
        sink = PositionUpdateSink(self.samples.append, self.errors.append)
        self.sub = qtp.QtSubscription(PRECISE, self.geo, qtp.OrThrottle(1000, 1.0), sink)

    def test_start_requests_every_update(self):
        self.sub.start()
        self.geo.setUpdateInterval.assert_called_once_with(0)
        self.geo.startUpdates.assert_called_once()

    def test_positions_go_through_throttle(self):
        self.sub._on_position(make_info(msecs=0))
        self.sub._on_position(make_info(msecs=100))      # same spot, too soon
        self.sub._on_position(make_info(msecs=1000))
        self.assertEqual([s.observed_at for s in self.samples], [0.0, 1.0])

    def test_access_error_reported(self):
        self.sub._on_error(SourceError.AccessError)
        self.assertEqual(self.errors, ["Location permission required"])

    def test_timeout_is_not_an_error(self):
        self.sub._on_error(SourceError.UpdateTimeoutError)
        self.sub._on_error(SourceError.NoError)
        self.assertEqual(self.errors, [])

    def test_cancel_stops_and_disconnects(self):
        self.sub.cancel()
        self.geo.stopUpdates.assert_called_once()
        self.geo.positionUpdated.disconnect.assert_called_once()
        self.geo.errorOccurred.disconnect.assert_called_once()


class TestQtPositionProvider(unittest.TestCase):

    def setUp(self):
        self._saved = (shared.precise_plugin, shared.approximate_plugin)
        shared.precise_plugin = ""
        shared.approximate_plugin = ""

        patcher = patch.object(qtp, "nmea_source_parameters", return_value=None)
        self.nmea = patcher.start()
        self.addCleanup(patcher.stop)

        self.geo_class = MagicMock()
        patcher = patch.object(qtp, "QGeoPositionInfoSource", self.geo_class)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.provider = qtp.QtPositionProvider()

    def tearDown(self):
        shared.precise_plugin, shared.approximate_plugin = self._saved

    def test_enabled_when_platform_reports_methods(self):
        self.geo_class.createDefaultSource.return_value = make_geo(PositioningMethod.SatellitePositioningMethods)
        self.assertTrue(self.provider.is_source_enabled(PRECISE))

    def test_disabled_when_no_methods(self):
        self.geo_class.createDefaultSource.return_value = make_geo(PositioningMethod.NoPositioningMethods)
        self.assertFalse(self.provider.is_source_enabled(APPROXIMATE))

    def test_no_plugin_means_disabled_and_subscribe_fails(self):
        self.geo_class.createDefaultSource.return_value = None
        self.assertFalse(self.provider.is_source_enabled(PRECISE))
        with self.assertRaises(SubscriptionFailed):
            self.provider.subscribe(PRECISE, 1000, 1.0, PositionUpdateSink(print, print))

    def test_missing_plugin_is_looked_up_again(self):
        self.geo_class.createDefaultSource.side_effect = [
            None, make_geo(PositioningMethod.SatellitePositioningMethods)]

        self.assertFalse(self.provider.is_source_enabled(PRECISE))
        self.assertTrue(self.provider.is_source_enabled(PRECISE))
        self.assertEqual(self.geo_class.createDefaultSource.call_count, 2)

    def test_unchanged_choice_reuses_source(self):
        self.geo_class.createDefaultSource.return_value = make_geo()
        self.provider.is_source_enabled(PRECISE)
        self.provider.is_source_enabled(PRECISE)
        self.assertEqual(self.geo_class.createDefaultSource.call_count, 1)

    def test_receiver_plugged_in_later_is_used(self):
        self.geo_class.createDefaultSource.return_value = make_geo(PositioningMethod.NoPositioningMethods)
        self.assertFalse(self.provider.is_source_enabled(PRECISE))

        params = {"nmea.source": "serial:/dev/ttyUSB0", "nmea.baudrate": 4800}
        self.nmea.return_value = params
        self.geo_class.createSource.return_value = make_geo(PositioningMethod.SatellitePositioningMethods)

        self.assertTrue(self.provider.is_source_enabled(PRECISE))
        self.geo_class.createSource.assert_called_once_with("nmea", params, self.provider)

        # unplugged again
        self.nmea.return_value = None
        self.assertFalse(self.provider.is_source_enabled(PRECISE))
        self.assertEqual(self.geo_class.createDefaultSource.call_count, 2)

    def test_configured_plugin_is_used(self):
        shared.approximate_plugin = "geoclue2"
        self.geo_class.createSource.return_value = make_geo()
        self.provider.is_source_enabled(APPROXIMATE)
        self.assertEqual(self.geo_class.createSource.call_args[0][0], "geoclue2")

    def test_last_known_precise_is_satellite_only(self):
        geo = make_geo(last=make_info())
        self.geo_class.createDefaultSource.return_value = geo

        sample = self.provider.last_known(PRECISE)

        geo.lastKnownPosition.assert_called_once_with(True)
        self.assertEqual(sample.source, PRECISE)

    def test_last_known_absent(self):
        self.geo_class.createDefaultSource.return_value = make_geo(last=make_info(valid=False))
        self.assertIsNone(self.provider.last_known(APPROXIMATE))


if __name__ == "__main__":
    unittest.main()
