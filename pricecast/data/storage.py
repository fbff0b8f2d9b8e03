import time
import torch
import yaml
import pandas as pd
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from ..contracts.config import ModelConfig
from ..models.builder import ModelBuilder
from ..models.lstm_model import TrainedModel

logger = logging.getLogger(__name__)

MODEL_FILE = "model.pt"
CONFIG_FILE = "config.yaml"
HISTORY_FILE = "loss_history.csv"


class ModelStorage:
    """
    Saves trained models as ``<root>/<ticker>_<unix epoch ms>/``.

    The ModelConfig, and with it the normalization divisor, is written next
    to the weights so a reloaded model predicts on the same scale it was
    trained on.
    """
    def __init__(self, root: Union[str, Path] = "models"):
        self.root = Path(root)

    def model_dir(self, ticker: str, timestamp_ms: Optional[int] = None) -> Path:
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return self.root / f"{ticker.lower()}_{timestamp_ms}"

    def save(self, trained: TrainedModel, ticker: str,
             history: Optional[Sequence[float]] = None) -> Path:
        path = self.model_dir(ticker)
        path.mkdir(parents=True, exist_ok=True)

        checkpoint = {
            'model_state_dict': trained.net.state_dict(),
            'config': trained.config.model_dump(),
        }
        torch.save(checkpoint, path / MODEL_FILE)

        with open(path / CONFIG_FILE, 'w') as f:
            yaml.safe_dump(trained.config.model_dump(), f, sort_keys=False)

        if history:
            pd.DataFrame({
                'epoch': range(1, len(history) + 1),
                'loss': list(history),
            }).to_csv(path / HISTORY_FILE, index=False)

        logger.info(f"Model saved: {path}")
        return path

    def load(self, path: Union[str, Path]) -> TrainedModel:
        path = Path(path)
        checkpoint = torch.load(path / MODEL_FILE, map_location='cpu')

        config = ModelConfig(**checkpoint['config'])
        trained = ModelBuilder(config).restore(checkpoint['model_state_dict'])
        logger.info(f"Model loaded: {path} (divisor {config.normalization_divisor})")
        return trained

    def load_history(self, path: Union[str, Path]) -> Optional[pd.DataFrame]:
        history_path = Path(path) / HISTORY_FILE
        if not history_path.exists():
            return None
        return pd.read_csv(history_path)
