import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from kpiengine.attainment.cli import main, run
from kpiengine.api.cache import series_fingerprint

SERIES = {
    "trendPolarity": "lower-is-better",
    "aggregationMode": "evolution",
    "periods": [{"competency": "01/2024", "target": 100, "actual": 80, "active": True}],
}


class TestCLI(unittest.TestCase):
    def test_run_single(self):
        out = run(SERIES)
        self.assertAlmostEqual(out["partial"], 125.0)
        self.assertIn("method", out)

    def test_run_batch(self):
        out = run({"indicators": {"Cost": SERIES}})
        self.assertIn("Cost", out["results"])
        self.assertEqual(out["attention"], [])
        with self.assertRaises(ValueError):
            run({"indicators": []})

    def test_main_reads_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "series.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump(SERIES, f)
            buf = io.StringIO()
            with redirect_stdout(buf):
                main([path])
        self.assertAlmostEqual(json.loads(buf.getvalue())["annual"], 125.0)

    def test_main_usage_and_errors(self):
        with self.assertRaises(SystemExit) as cm:
            main([])
        self.assertEqual(cm.exception.code, 2)
        with self.assertRaises(SystemExit):
            main(["/does/not/exist.json"])


class TestFingerprint(unittest.TestCase):
    def test_key_order_independent(self):
        a = {"x": 1, "y": [1, 2]}
        b = {"y": [1, 2], "x": 1}
        self.assertEqual(series_fingerprint(a), series_fingerprint(b))
        self.assertNotEqual(series_fingerprint(a), series_fingerprint({"x": 2, "y": [1, 2]}))


if __name__ == "__main__":
    unittest.main()
