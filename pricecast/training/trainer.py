"""
Training Loop
Fits the LSTM regressor on normalized price windows, in chronological batch
order, and reports progress to an observer.
"""
import time
import numpy as np
import torch
import logging
from typing import Optional

from torch.utils.data import DataLoader, TensorDataset

from ..contracts.config import ModelConfig
from ..contracts.training import ProgressEvent, TrainingResult
from ..errors import ConfigurationError, DataError
from ..models.builder import ModelBuilder
from ..models.lstm_model import TrainedModel
from .observers import ProgressObserver

logger = logging.getLogger(__name__)


class Trainer:
    """
    Runs ``epochs`` sequential passes over the data in batches of
    ``batch_size``. Batches are never shuffled. There is no early stop.
    """
    def __init__(self, config: ModelConfig, observer: Optional[ProgressObserver] = None):
        self.config = config
        self.observer = observer or ProgressObserver()
        self.builder = ModelBuilder(config)

    def _notify(self, hook: str, event: ProgressEvent):
        try:
            getattr(self.observer, hook)(event)
        except Exception:
            logger.warning(f"Progress observer {hook} failed, continuing training", exc_info=True)

    def check_inputs(self, features: np.ndarray, targets: np.ndarray):
        """Reject bad model shapes and empty or mis-shaped arrays before torch is touched."""
        self.builder.validate()

        features = np.asarray(features)
        targets = np.asarray(targets)

        if features.size == 0 or targets.size == 0:
            raise DataError(f"Nothing to train on: {len(features)} feature rows, {targets.size} targets")
        if features.ndim != 2 or features.shape[1] != self.config.window_size:
            raise ConfigurationError(
                f"Feature rows have shape {features.shape[1:]}, model expects width {self.config.window_size}"
            )
        if targets.reshape(-1).shape[0] != features.shape[0]:
            raise ConfigurationError(f"{features.shape[0]} feature rows but {targets.size} targets")

    def fit(self, features: np.ndarray, targets: np.ndarray) -> TrainingResult:
        """
        Args:
            features: Normalized matrix (rows, window_size)
            targets: Normalized vector (rows,)

        Returns:
            TrainingResult with the trained model, per-epoch loss and wall time
        """
        self.check_inputs(features, targets)
        cfg = self.config

        X = torch.as_tensor(np.asarray(features), dtype=torch.float32)
        y = torch.as_tensor(np.asarray(targets), dtype=torch.float32).reshape(-1, 1)
        loader = DataLoader(TensorDataset(X, y), batch_size=cfg.batch_size, shuffle=False)

        compiled = self.builder.build_and_compile()
        model, optimizer, criterion = compiled.net, compiled.optimizer, compiled.loss_fn

        n_batches = len(loader)
        history = []
        start = time.perf_counter()
        logger.info(f"Training on {len(X)} samples: {cfg.epochs} epochs x {n_batches} batches")

        for epoch in range(1, cfg.epochs + 1):
            self._notify('on_epoch_begin', ProgressEvent(epoch=epoch, epochs=cfg.epochs, batch=0, batches=n_batches))

            model.train()
            total_loss = 0.0
            for batch_idx, (xb, yb) in enumerate(loader):
                self._notify('on_batch_begin', ProgressEvent(
                    epoch=epoch, epochs=cfg.epochs, batch=batch_idx + 1, batches=n_batches))

                optimizer.zero_grad()
                loss = criterion(model(xb), yb)
                loss.backward()
                optimizer.step()

                total_loss += loss.item() * len(xb)

            epoch_loss = total_loss / len(X)
            history.append(epoch_loss)
            self._notify('on_epoch_end', ProgressEvent(
                epoch=epoch, epochs=cfg.epochs, batch=n_batches, batches=n_batches, loss=epoch_loss))

        elapsed = time.perf_counter() - start
        model.eval()
        logger.info(f"Training finished in {elapsed:.1f}s, final loss {history[-1]:.6f}")

        return TrainingResult(
            model=TrainedModel(net=model, config=cfg),
            history=history,
            elapsed_seconds=elapsed,
        )

    @staticmethod
    def evaluate(trained: TrainedModel, features: np.ndarray, targets: np.ndarray) -> Optional[float]:
        """Mean squared error on a normalized holdout set, None if it is empty."""
        features = np.asarray(features)
        if len(features) == 0:
            return None

        X = torch.as_tensor(features, dtype=torch.float32)
        y = torch.as_tensor(np.asarray(targets), dtype=torch.float32).reshape(-1, 1)

        trained.net.eval()
        with torch.no_grad():
            loss = torch.nn.functional.mse_loss(trained.net(X), y)
        return loss.item()
