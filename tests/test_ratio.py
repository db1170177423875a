import math
import unittest
from kpiengine.attainment.ratio import Polarity, per_period_ratios, ratio
from kpiengine.periods.normalizer import PeriodRecord


class TestRatio(unittest.TestCase):
    def test_higher_is_better(self):
        self.assertAlmostEqual(ratio(100, 120, Polarity.HIGHER_IS_BETTER), 120.0)
        self.assertAlmostEqual(ratio(100, 0, Polarity.HIGHER_IS_BETTER), 0.0)
        self.assertIsNone(ratio(0, 50, Polarity.HIGHER_IS_BETTER))

    def test_lower_is_better(self):
        self.assertAlmostEqual(ratio(100, 80, Polarity.LOWER_IS_BETTER), 125.0)
        self.assertAlmostEqual(ratio(0, 80, Polarity.LOWER_IS_BETTER), 0.0)
        v = ratio(100, 0, Polarity.LOWER_IS_BETTER)
        self.assertIsNone(v)

    def test_unmeasured(self):
        for p in Polarity:
            self.assertIsNone(ratio(100, None, p))

    def test_plain_string_polarity(self):
        self.assertAlmostEqual(ratio(100, 80, "lower-is-better"), 125.0)

    def test_never_infinite_or_nan(self):
        for p in Polarity:
            for target, actual in ((0, 0), (0, 1), (1, 0)):
                v = ratio(target, actual, p)
                self.assertTrue(v is None or math.isfinite(v))

    def test_overflowing_results_are_not_computable(self):
        self.assertIsNone(ratio(1e308, 1e-10, Polarity.LOWER_IS_BETTER))
        self.assertIsNone(ratio(1e-10, 1e308, Polarity.HIGHER_IS_BETTER))
        self.assertIsNone(ratio(float("inf"), float("inf"), Polarity.HIGHER_IS_BETTER))
        for p in Polarity:
            for target, actual in ((1e308, 1e-308), (1e-308, 1e308), (-1e308, 1e-300), (5e-324, 1e308)):
                v = ratio(target, actual, p)
                self.assertTrue(v is None or math.isfinite(v), (target, actual, p))

    def test_per_period(self):
        recs = [
            PeriodRecord("01/2024", 1, 2024, target=100, actual=50),
            PeriodRecord("02/2024", 2, 2024, target=100, actual=None),
        ]
        self.assertEqual(per_period_ratios(recs, Polarity.HIGHER_IS_BETTER), {"01/2024": 50.0, "02/2024": None})


if __name__ == "__main__":
    unittest.main()
