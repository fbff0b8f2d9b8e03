"""
Feature Normalization Module
Static scalar rescaling for prices fed to the LSTM.
"""
import math
import numpy as np
import logging
from typing import Union

from ..errors import ConfigurationError

logger = logging.getLogger("ScalarNormalizer")

ArrayLike = Union[float, np.ndarray]

# Normalized median outside this band means the divisor fits the instrument poorly
SCALE_WARN_LOW = 0.1
SCALE_WARN_HIGH = 100.0


class ScalarNormalizer:
    """
    Divides every feature and target by one fixed divisor and multiplies
    predictions back by it.

    This is not data-adaptive (no min-max, no z-score): the divisor does not
    follow the price level of the instrument, so penny stocks and very
    high-priced shares end up far from unit scale. ``check_scale`` reports
    that case.
    """
    def __init__(self, divisor: float = 10.0):
        """
        Args:
            divisor: Finite, strictly positive scale factor
        """
        if not math.isfinite(divisor) or divisor <= 0:
            raise ConfigurationError(f"normalization divisor must be finite and > 0, got {divisor}")
        self.divisor = float(divisor)

    def normalize(self, values: ArrayLike) -> ArrayLike:
        if np.isscalar(values):
            return values / self.divisor
        return np.asarray(values, dtype=np.float64) / self.divisor

    def denormalize(self, values: ArrayLike) -> ArrayLike:
        if np.isscalar(values):
            return values * self.divisor
        return np.asarray(values, dtype=np.float64) * self.divisor

    def check_scale(self, values: np.ndarray) -> bool:
        """
        Warn when normalized prices sit far from unit scale.

        Returns:
            True if the normalized median is inside the comfortable band
        """
        values = np.asarray(values, dtype=np.float64)
        if values.size == 0:
            return True

        median = float(np.median(np.abs(values))) / self.divisor
        if median < SCALE_WARN_LOW or median > SCALE_WARN_HIGH:
            logger.warning(
                f"Normalized median price {median:.4f} is outside [{SCALE_WARN_LOW}, {SCALE_WARN_HIGH}] "
                f"with divisor {self.divisor}; predictions for this instrument may be poor"
            )
            return False
        return True
