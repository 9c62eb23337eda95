import sys
import os
import shutil
import tempfile
import unittest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dssim_optimizer.algorithms import IterationRecord, Outcome, SearchResult
from dssim_optimizer.history import (
    COLUMNS,
    history_to_dataframe,
    load_history,
    save_history,
)
from dssim_optimizer.params import Direction


def sample_result():
    records = (
        IterationRecord(0, 85, 0.012, Direction.INCREASE, 25),
        IterationRecord(1, 110, 0.003, Direction.DECREASE, 12),
        IterationRecord(2, 98, 0.009, None, 12),
    )
    return SearchResult(98, Outcome.CONVERGED, records)


class TestHistory(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp(prefix="dssim_history_")
        self.csv_path = os.path.join(self.tmpdir, "history.csv")

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_dataframe(self):
        df = history_to_dataframe(sample_result(), encoder="mozjpeg")

        self.assertEqual(list(df.columns), COLUMNS)
        self.assertEqual(df["Quality"].tolist(), [85, 110, 98])
        self.assertEqual(df["Direction"].tolist(), ["+", "-", ""])
        self.assertEqual(df["Step"].tolist(), [25, 12, 12])
        self.assertTrue((df["Outcome"] == "converged").all())
        self.assertTrue((df["Encoder"] == "mozjpeg").all())

    def test_save_and_load(self):
        save_history(sample_result(), self.csv_path, encoder="jpegoptim")
        df = load_history(self.csv_path)

        self.assertEqual(len(df), 3)
        self.assertAlmostEqual(df["DSSIM"].iloc[1], 0.003)
        self.assertEqual(df["Direction"].iloc[2], "")

    def test_append_keeps_single_header(self):
        save_history(sample_result(), self.csv_path, append=True)
        save_history(sample_result(), self.csv_path, append=True)
        df = load_history(self.csv_path)

        self.assertEqual(len(df), 6)
        self.assertEqual(df["Iter"].tolist(), [0, 1, 2, 0, 1, 2])

    def test_overwrite(self):
        save_history(sample_result(), self.csv_path)
        save_history(sample_result(), self.csv_path)
        self.assertEqual(len(load_history(self.csv_path)), 3)


if __name__ == "__main__":
    unittest.main()
