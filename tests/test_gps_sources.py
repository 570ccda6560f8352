from __future__ import annotations

import unittest

from gps_sources import SourceAvailability

from .test_common import APPROXIMATE, PRECISE, FakeProvider


class TestSourceAvailability(unittest.TestCase):

    def test_enabled_sources_in_fallback_order(self):
        availability = SourceAvailability(FakeProvider(enabled=(APPROXIMATE, PRECISE)))
        self.assertEqual(availability.enabled_sources(), [PRECISE, APPROXIMATE])

    def test_none_enabled(self):
        self.assertEqual(SourceAvailability(FakeProvider(enabled=())).enabled_sources(), [])

    def test_not_cached(self):
        provider = FakeProvider(enabled=(PRECISE,))
        availability = SourceAvailability(provider)
        self.assertTrue(availability.is_enabled(PRECISE))

        provider.enabled = set()
        self.assertFalse(availability.is_enabled(PRECISE))

    def test_provider_error_means_disabled(self):
        provider = FakeProvider()

        def broken(source):
            if source is PRECISE:
                raise RuntimeError("plugin crashed")
            return True
        provider.is_source_enabled = broken

        self.assertEqual(SourceAvailability(provider).enabled_sources(), [APPROXIMATE])


if __name__ == "__main__":
    unittest.main()
