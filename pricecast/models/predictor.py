import numpy as np
import torch
import logging

from ..errors import ConfigurationError
from ..features.normalization import ScalarNormalizer
from .lstm_model import TrainedModel

logger = logging.getLogger(__name__)


class Predictor:
    """
    Runs inference with the same divisor the model was trained with.
    Holds no state between calls.
    """
    def __init__(self, trained: TrainedModel):
        self.trained = trained
        self.normalizer = ScalarNormalizer(trained.normalization_divisor)

    def predict(self, rows) -> np.ndarray:
        """
        Args:
            rows: Raw (un-normalized) prices, one row of window_size values
                or a (n, window_size) matrix

        Returns:
            One denormalized price per row
        """
        rows = np.asarray(rows, dtype=np.float64)
        if rows.ndim == 1:
            rows = rows.reshape(1, -1)

        window_size = self.trained.config.window_size
        if rows.ndim != 2 or rows.shape[1] != window_size:
            raise ConfigurationError(f"Prediction rows have shape {rows.shape}, expected (n, {window_size})")

        X = torch.as_tensor(self.normalizer.normalize(rows), dtype=torch.float32)

        self.trained.net.eval()
        with torch.no_grad():
            outputs = self.trained.net(X)

        return self.normalizer.denormalize(outputs.cpu().numpy().reshape(-1))
