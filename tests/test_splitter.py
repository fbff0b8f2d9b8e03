"""
Tests for the chronological train/test split
"""
import math
import unittest

from pricecast.data.windowing import create_windows
from pricecast.errors import ConfigurationError
from pricecast.validation.splitter import ChronologicalSplitter

from helpers import make_observations


class TestChronologicalSplitter(unittest.TestCase):

    def test_ten_items_at_eighty_percent(self):
        data = list(range(10))
        train, test = ChronologicalSplitter(0.8).split(data)

        self.assertEqual(len(train), 8)
        self.assertEqual(len(test), 2)
        self.assertEqual(train[7], data[7])
        self.assertEqual(test, [8, 9])

    def test_split_law(self):
        """train + test == data and len(train) == floor(N * f)"""
        for f in (0.1, 0.25, 0.5, 0.8, 0.99, 1.0):
            splitter = ChronologicalSplitter(f)
            for n in range(0, 31):
                data = list(range(n))
                train, test = splitter.split(data)

                self.assertEqual(train + test, data)
                self.assertEqual(len(train), math.floor(n * f))

    def test_full_fraction_leaves_test_empty(self):
        train, test = ChronologicalSplitter(1.0).split(list(range(7)))
        self.assertEqual(len(train), 7)
        self.assertEqual(test, [])

    def test_default_fraction(self):
        self.assertEqual(ChronologicalSplitter().split_fraction, 0.8)

    def test_invalid_fraction(self):
        for f in (0, -0.5, 1.01, 2, float('nan')):
            with self.assertRaises(ConfigurationError):
                ChronologicalSplitter(f)

    def test_splits_windows_in_order(self):
        windows = create_windows(make_observations(20), window_size=5)
        train, test = ChronologicalSplitter(0.75).split(windows)

        self.assertEqual(len(train), 12)
        self.assertLess(train[-1].first.date, test[0].first.date)

    def test_get_indices(self):
        train_idx, test_idx = ChronologicalSplitter(0.8).get_indices(10)
        self.assertEqual(train_idx.tolist(), list(range(8)))
        self.assertEqual(test_idx.tolist(), [8, 9])


if __name__ == '__main__':
    unittest.main()
