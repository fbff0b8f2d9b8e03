"""
Tests for the series validator
"""
import unittest

from pricecast.data.validator import SeriesValidator

from helpers import make_observations


class TestSeriesValidator(unittest.TestCase):

    def setUp(self):
        self.validator = SeriesValidator()

    def test_clean_series_passes(self):
        is_valid, errors = self.validator.validate(make_observations(30), "TEST")
        self.assertTrue(is_valid)
        self.assertEqual(errors, [])

    def test_empty_series(self):
        is_valid, errors = self.validator.validate([])
        self.assertFalse(is_valid)
        self.assertEqual(errors, ["Series is empty"])

    def test_descending_dates_reported(self):
        observations = list(reversed(make_observations(5)))
        with self.assertLogs('SeriesValidator', level='WARNING'):
            is_valid, errors = self.validator.validate(observations)
        self.assertFalse(is_valid)
        self.assertTrue(any("not ascending" in e for e in errors))

    def test_duplicate_dates_reported(self):
        observations = make_observations(5)
        observations.insert(2, observations[2])
        _, errors = self.validator.validate(observations)
        self.assertTrue(any("duplicated" in e for e in errors))

    def test_non_positive_prices_reported(self):
        observations = make_observations(5)
        observations[3] = observations[3].model_copy(update={'low': 0.0})
        _, errors = self.validator.validate(observations)
        self.assertTrue(any("Non-positive" in e for e in errors))

    def test_missing_feature_field_reported(self):
        observations = make_observations(5)
        observations[0] = observations[0].model_copy(update={'adj_close': None})
        _, errors = self.validator.validate(observations)
        self.assertTrue(any("adj_close" in e for e in errors))

    def test_validator_never_modifies_input(self):
        observations = list(reversed(make_observations(5)))
        snapshot = list(observations)
        self.validator.validate(observations)
        self.assertEqual(observations, snapshot)


if __name__ == '__main__':
    unittest.main()
