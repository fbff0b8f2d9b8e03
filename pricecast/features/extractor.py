"""
Window Feature Extraction
Maps windows to model inputs and supervised targets.
"""
import numpy as np
import logging
from typing import Sequence, Tuple

from ..contracts.config import LabelMode
from ..contracts.data import Window
from ..data.windowing import field_value
from ..errors import DataError

logger = logging.getLogger(__name__)


class FeatureExtractor:
    """
    Builds one feature row per window from a single price field and pairs it
    with a target according to the labeling mode.

    Labeling:
    - next_value: the target field of the observation right after window i,
      i.e. the newest observation of window i + 1
    - window_aggregate: the aggregate attached to window i when it was built

    The newest window never has a known next value, so it is left out of the
    supervised pairs in both modes and kept as the forecast input instead.
    """
    def __init__(self, price_field: str = "adj_close",
                 target_field: str = "adj_close",
                 label_mode: LabelMode = LabelMode.NEXT_VALUE):
        self.price_field = price_field
        self.target_field = target_field
        self.label_mode = LabelMode(label_mode)

    def features(self, window: Window) -> np.ndarray:
        return np.array([field_value(o, self.price_field) for o in window.observations],
                        dtype=np.float64)

    def target(self, windows: Sequence[Window], i: int) -> float:
        if self.label_mode == LabelMode.WINDOW_AGGREGATE:
            aggregate = windows[i].aggregate
            if aggregate is None:
                raise DataError(f"Window {i} was built without an aggregate")
            return float(aggregate)

        return field_value(windows[i + 1].last, self.target_field)

    def build_pairs(self, windows: Sequence[Window]) -> Tuple[np.ndarray, np.ndarray]:
        """
        Args:
            windows: Chronological windows

        Returns:
            X of shape (len(windows) - 1, W) and y of shape (len(windows) - 1,)
        """
        n_pairs = max(0, len(windows) - 1)
        width = len(windows[0]) if windows else 0

        X = np.empty((n_pairs, width), dtype=np.float64)
        y = np.empty(n_pairs, dtype=np.float64)
        for i in range(n_pairs):
            X[i] = self.features(windows[i])
            y[i] = self.target(windows, i)

        logger.debug(f"Extracted {n_pairs} pairs ({self.label_mode.value}) from {len(windows)} windows")
        return X, y

    def forecast_row(self, windows: Sequence[Window]) -> np.ndarray:
        """Features of the newest window as a (1, W) matrix."""
        if not windows:
            raise DataError("No windows available to forecast from")
        return self.features(windows[-1]).reshape(1, -1)
