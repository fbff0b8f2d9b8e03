"""
Series Validator
Reports problems in a price history before it is windowed.
"""
import pandas as pd
import logging
from typing import List, Sequence, Tuple

from ..contracts.data import Observation
from .providers import observations_to_frame

logger = logging.getLogger("SeriesValidator")


class SeriesValidator:
    """
    Checks for common data issues:
    - Empty series
    - Dates not strictly ascending (unsorted or duplicated)
    - Non-positive prices
    - Missing values in the feature field

    Chronological order is a precondition of the pipeline, not something it
    enforces, so this only reports. Nothing is dropped or reordered.
    """
    def __init__(self, price_field: str = "adj_close"):
        self.price_field = price_field

    def validate(self, observations: Sequence[Observation], symbol: str = "") -> Tuple[bool, List[str]]:
        """
        Run all checks.
        Returns: (is_valid, list_of_errors)
        """
        df = observations_to_frame(observations)
        if df.empty:
            return False, ["Series is empty"]

        errors = []

        # 1. Chronological order
        diffs = df.index.to_series().diff().dropna()
        if (diffs < pd.Timedelta(0)).any():
            errors.append(f"Dates are not ascending ({int((diffs < pd.Timedelta(0)).sum())} reversals)")
        if df.index.duplicated().any():
            errors.append(f"Found {int(df.index.duplicated().sum())} duplicated dates")

        # 2. Non-positive prices
        prices = ['open', 'high', 'low', 'close']
        bad = (df[prices] <= 0).sum()
        if bad.any():
            errors.append(f"Non-positive prices: {bad[bad > 0].to_dict()}")

        # 3. Feature field coverage
        missing = df[self.price_field].isna().sum()
        if missing:
            errors.append(f"{missing} rows have no '{self.price_field}' value")

        is_valid = len(errors) == 0

        if not is_valid:
            logger.warning(f"Validation FAILED for {symbol or 'series'}:")
            for e in errors:
                logger.warning(f"  - {e}")
        else:
            logger.info(f"Validation PASSED for {symbol or 'series'}")

        return is_valid, errors
