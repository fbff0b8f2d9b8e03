"""
Tests for window feature extraction and labeling
"""
import unittest
import numpy as np

from pricecast.contracts.config import LabelMode
from pricecast.data.windowing import create_windows
from pricecast.errors import DataError
from pricecast.features.extractor import FeatureExtractor

from helpers import make_observations


class TestFeatureExtractor(unittest.TestCase):

    def setUp(self):
        # closes 100, 101, ..., 105 -> windows [100..102], [101..103], [102..104], [103..105]
        self.observations = make_observations(6, start=100.0)
        self.windows = create_windows(self.observations, window_size=3)

    def test_features_follow_price_field_in_order(self):
        extractor = FeatureExtractor(price_field='adj_close')
        np.testing.assert_array_equal(extractor.features(self.windows[1]), [101.0, 102.0, 103.0])

        extractor = FeatureExtractor(price_field='high')
        np.testing.assert_array_equal(extractor.features(self.windows[0]), [101.0, 102.0, 103.0])

    def test_next_value_pairs(self):
        X, y = FeatureExtractor().build_pairs(self.windows)

        self.assertEqual(X.shape, (3, 3))
        np.testing.assert_array_equal(X[0], [100.0, 101.0, 102.0])
        # Target is the observation right after each window
        np.testing.assert_array_equal(y, [103.0, 104.0, 105.0])

    def test_next_value_uses_target_field(self):
        observations = [o.model_copy(update={'close': o.close * 2}) for o in self.observations]
        windows = create_windows(observations, window_size=3)

        X, y = FeatureExtractor(price_field='adj_close', target_field='close').build_pairs(windows)
        np.testing.assert_array_equal(X[0], [100.0, 101.0, 102.0])
        np.testing.assert_array_equal(y, [206.0, 208.0, 210.0])

    def test_window_aggregate_pairs(self):
        windows = create_windows(self.observations, window_size=3, aggregate_field='adj_close')
        X, y = FeatureExtractor(label_mode=LabelMode.WINDOW_AGGREGATE).build_pairs(windows)

        # Newest window is still held back for the forecast
        self.assertEqual(len(X), 3)
        np.testing.assert_allclose(y, [101.0, 102.0, 103.0])

    def test_window_aggregate_requires_aggregate(self):
        extractor = FeatureExtractor(label_mode='window_aggregate')
        with self.assertRaises(DataError):
            extractor.build_pairs(self.windows)

    def test_single_window_has_no_pairs(self):
        X, y = FeatureExtractor().build_pairs(self.windows[:1])
        self.assertEqual(len(X), 0)
        self.assertEqual(len(y), 0)

    def test_empty_windows(self):
        X, y = FeatureExtractor().build_pairs([])
        self.assertEqual(X.size, 0)
        self.assertEqual(y.size, 0)

    def test_forecast_row_is_newest_window(self):
        row = FeatureExtractor().forecast_row(self.windows)
        self.assertEqual(row.shape, (1, 3))
        np.testing.assert_array_equal(row[0], [103.0, 104.0, 105.0])

    def test_forecast_row_needs_a_window(self):
        with self.assertRaises(DataError):
            FeatureExtractor().forecast_row([])


if __name__ == '__main__':
    unittest.main()
