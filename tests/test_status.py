import unittest
from kpiengine.attainment.ratio import Polarity
from kpiengine.attainment.status import Status, best_period, classify, needs_attention
from kpiengine.config.env import StatusThresholds
from kpiengine.periods.normalizer import PeriodRecord


def months(actuals):
    return [PeriodRecord(f"{m:02d}/2024", m, 2024, target=100, actual=a) for m, a in enumerate(actuals, start=1)]


class TestStatus(unittest.TestCase):
    def test_classify_bands(self):
        self.assertEqual(classify(100.0), Status.ON_TARGET)
        self.assertEqual(classify(130.0), Status.ON_TARGET)
        self.assertEqual(classify(80.0), Status.ATTENTION)
        self.assertEqual(classify(79.99), Status.CRITICAL)
        self.assertIsNone(classify(None))

    def test_classify_custom_thresholds(self):
        t = StatusThresholds(on_target=95.0, attention=70.0)
        self.assertEqual(classify(96.0, t), Status.ON_TARGET)
        self.assertEqual(classify(75.0, t), Status.ATTENTION)

    def test_best_period_by_polarity(self):
        recs = months([50, None, 90, 90, 20])
        self.assertEqual(best_period(recs, Polarity.HIGHER_IS_BETTER).competency, "03/2024")
        self.assertEqual(best_period(recs, Polarity.LOWER_IS_BETTER).competency, "05/2024")
        self.assertIsNone(best_period(months([None]), Polarity.HIGHER_IS_BETTER))

    def test_needs_attention(self):
        names = needs_attention([("a", 79.0), ("b", 120.0), ("c", None), ("d", 10.0)])
        self.assertEqual(names, ["d", "a"])


if __name__ == "__main__":
    unittest.main()
