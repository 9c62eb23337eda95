import sys
import os
import unittest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dssim_optimizer.errors import ConfigurationError
from dssim_optimizer.params import Direction, SearchConfig, TargetBand, ToolPaths


class TestTargetBand(unittest.TestCase):
    def setUp(self):
        self.band = TargetBand(0.008, 0.010)

    def test_classify_too_similar(self):
        self.assertIs(self.band.classify(0.003), Direction.DECREASE)
        self.assertIs(self.band.classify(0.0), Direction.DECREASE)

    def test_classify_too_different(self):
        self.assertIs(self.band.classify(0.012), Direction.INCREASE)

    def test_boundaries_are_half_open(self):
        """lower counts as accepted, upper counts as too different"""
        self.assertIsNone(self.band.classify(0.008))
        self.assertIs(self.band.classify(0.010), Direction.INCREASE)
        self.assertIn(0.009, self.band)
        self.assertNotIn(0.010, self.band)

    def test_inverted_band_rejected(self):
        with self.assertRaises(ConfigurationError):
            TargetBand(0.02, 0.01)

    def test_empty_band_rejected(self):
        with self.assertRaises(ConfigurationError):
            TargetBand(0.01, 0.01)

    def test_negative_lower_rejected(self):
        with self.assertRaises(ConfigurationError):
            TargetBand(-0.001, 0.01)

    def test_direction_sign(self):
        self.assertEqual(Direction.INCREASE.sign, 1)
        self.assertEqual(Direction.DECREASE.sign, -1)
        self.assertEqual(Direction.INCREASE.value, "+")


class TestSearchConfig(unittest.TestCase):
    def test_defaults(self):
        config = SearchConfig()
        self.assertEqual(config.initial_quality, 85)
        self.assertEqual(config.initial_step, 25)
        self.assertEqual(config.max_iterations, 10)
        self.assertEqual(config.band, TargetBand(0.008, 0.010))
        self.assertEqual(config.encoder, "jpegoptim")
        self.assertIsNone(config.quality_bounds)

    def test_non_positive_budget_rejected(self):
        for budget in (0, -3):
            with self.assertRaises(ConfigurationError):
                SearchConfig(max_iterations=budget)

    def test_zero_step_rejected(self):
        with self.assertRaises(ConfigurationError):
            SearchConfig(initial_step=0)

    def test_inverted_quality_bounds_rejected(self):
        with self.assertRaises(ConfigurationError):
            SearchConfig(quality_bounds=(100, 1))

    def test_initial_quality_must_lie_within_bounds(self):
        with self.assertRaises(ConfigurationError):
            SearchConfig(initial_quality=150, quality_bounds=(1, 100))
        config = SearchConfig(initial_quality=100, quality_bounds=(1, 100))
        self.assertEqual(config.initial_quality, 100)

    def test_config_is_immutable(self):
        config = SearchConfig()
        with self.assertRaises(AttributeError):
            config.initial_quality = 50

    def test_tool_paths_defaults(self):
        tools = ToolPaths()
        self.assertEqual(tools.dssim, "dssim")
        self.assertEqual(tools.convert, "convert")


if __name__ == "__main__":
    unittest.main()
