from __future__ import annotations

import unittest

from gps_merge import Accept, CurrentLocation, merge

from .test_common import APPROXIMATE, PRECISE, make_sample


class TestMerge(unittest.TestCase):

    def test_first_sample_accepted(self):
        s = make_sample()
        self.assertEqual(merge(s, None), Accept(s))

    def test_later_sample_always_wins(self):
        current = make_sample(PRECISE, accuracy=2.0, t=500.0)
        worse = make_sample(APPROXIMATE, accuracy=1500.0, t=100.0)
        self.assertEqual(merge(worse, current).sample, worse)

    def test_sequence_ends_on_last_sample(self):
        location = CurrentLocation()
        samples = [make_sample(lat=float(i), t=float(10 - i)) for i in range(5)]
        for s in samples:
            location.replace(merge(s, location.sample).sample)
        self.assertEqual(location.sample, samples[-1])


class TestCurrentLocation(unittest.TestCase):

    def test_starts_without_fix(self):
        location = CurrentLocation()
        self.assertFalse(location.has_fix)
        self.assertIsNone(location.sample)

    def test_replace_and_clear(self):
        location = CurrentLocation()
        s = make_sample()
        location.replace(s)
        self.assertTrue(location.has_fix)
        self.assertIs(location.sample, s)

        location.clear()
        self.assertFalse(location.has_fix)


if __name__ == "__main__":
    unittest.main()
