"""
Chronological Split Module
Static train/holdout partition for time-series data.
"""
import math
import numpy as np
import logging
from typing import Sequence, Tuple, TypeVar

from ..errors import ConfigurationError

logger = logging.getLogger("ChronologicalSplitter")

T = TypeVar("T")


class ChronologicalSplitter:
    """
    Splits an ordered sequence into a leading train segment and a trailing
    test segment. Nothing is shuffled, so every test item is newer than every
    train item.

    Structure:
    |--------Train (floor(N * f))--------|--Test--|
    """
    def __init__(self, split_fraction: float = 0.8):
        """
        Args:
            split_fraction: Share of items in the train segment, in (0, 1].
                1.0 leaves the test segment empty.
        """
        if not (0 < split_fraction <= 1):
            raise ConfigurationError(f"split_fraction must be in (0, 1], got {split_fraction}")
        self.split_fraction = split_fraction

    def train_size(self, n_samples: int) -> int:
        return math.floor(n_samples * self.split_fraction)

    def split(self, data: Sequence[T]) -> Tuple[Sequence[T], Sequence[T]]:
        """
        Args:
            data: Sequence to split (must be sorted by time)

        Returns:
            (train, test) with train + test == data
        """
        first = self.train_size(len(data))
        train, test = data[:first], data[first:]

        logger.info(f"Chronological split: {len(train)} train / {len(test)} test "
                    f"(fraction {self.split_fraction})")
        return train, test

    def get_indices(self, n_samples: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate indices instead of slices.
        """
        indices = np.arange(n_samples)
        first = self.train_size(n_samples)
        return indices[:first], indices[first:]
