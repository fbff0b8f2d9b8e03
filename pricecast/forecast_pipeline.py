"""
Forecast Pipeline
Full chain from a price history to a trained model and a next-day forecast.
"""
import numpy as np
import logging
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from typing import Optional, Sequence

from .contracts.config import AppConfig, LabelMode
from .contracts.data import Observation
from .contracts.training import TrainingResult
from .data.windowing import create_windows
from .errors import DataError
from .features.extractor import FeatureExtractor
from .features.normalization import ScalarNormalizer
from .models.lstm_model import TrainedModel
from .models.predictor import Predictor
from .training.observers import ProgressObserver
from .training.trainer import Trainer
from .validation.splitter import ChronologicalSplitter

logger = logging.getLogger(__name__)


class PreparedData(BaseModel):
    """Raw (un-normalized) supervised pairs plus the forecast input."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    train_X: np.ndarray
    train_y: np.ndarray
    test_X: np.ndarray
    test_y: np.ndarray
    forecast_row: np.ndarray
    last_date: datetime


class ForecastRun(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    result: TrainingResult
    forecast_row: np.ndarray
    last_date: datetime
    holdout_loss: Optional[float] = None

    @property
    def model(self) -> TrainedModel:
        return self.result.model


class ForecastPipeline:
    """
    Pipeline flow:
    1. Window the observation series
    2. Split windows chronologically into train/test
    3. Extract feature rows and targets, one pair per window with a successor
    4. Normalize with the configured divisor
    5. Build and fit the LSTM regressor
    6. Score the holdout and keep the newest window for the forecast
    """
    def __init__(self, config: AppConfig, observer: Optional[ProgressObserver] = None):
        self.config = config
        self.observer = observer

        data_cfg = config.data
        self.splitter = ChronologicalSplitter(data_cfg.split_fraction)
        self.extractor = FeatureExtractor(
            price_field=data_cfg.price_field,
            target_field=data_cfg.target_field,
            label_mode=data_cfg.label_mode,
        )
        self.normalizer = ScalarNormalizer(config.model.normalization_divisor)

    def prepare(self, observations: Sequence[Observation]) -> PreparedData:
        data_cfg = self.config.data
        window_size = self.config.model.window_size

        aggregate_field = None
        if data_cfg.label_mode == LabelMode.WINDOW_AGGREGATE:
            aggregate_field = data_cfg.target_field

        windows = create_windows(
            observations,
            window_size=window_size,
            aggregate_field=aggregate_field,
            aggregate_mode=data_cfg.aggregate_mode,
        )
        if not windows:
            raise DataError(
                f"Need at least {window_size} observations to build one window, got {len(observations)}"
            )

        train, _ = self.splitter.split(windows)

        # Pairs come from the whole series so the last train window keeps
        # its successor; only the newest window goes without a target.
        X, y = self.extractor.build_pairs(windows)
        first = len(train)

        return PreparedData(
            train_X=X[:first],
            train_y=y[:first],
            test_X=X[first:],
            test_y=y[first:],
            forecast_row=self.extractor.forecast_row(windows),
            last_date=windows[-1].last.date,
        )

    def train(self, observations: Sequence[Observation]) -> ForecastRun:
        """
        Prepare, normalize and fit. Data problems raise DataError before any
        model is built.
        """
        prepared = self.prepare(observations)
        logger.info(f"Supervised pairs: {len(prepared.train_X)} train / {len(prepared.test_X)} test")

        self.normalizer.check_scale(prepared.train_X)

        trainer = Trainer(self.config.model, observer=self.observer)
        result = trainer.fit(
            self.normalizer.normalize(prepared.train_X),
            self.normalizer.normalize(prepared.train_y),
        )

        holdout_loss = Trainer.evaluate(
            result.model,
            self.normalizer.normalize(prepared.test_X),
            self.normalizer.normalize(prepared.test_y),
        )
        if holdout_loss is not None:
            logger.info(f"Holdout loss (normalized MSE): {holdout_loss:.6f}")

        return ForecastRun(
            result=result,
            forecast_row=prepared.forecast_row,
            last_date=prepared.last_date,
            holdout_loss=holdout_loss,
        )

    @staticmethod
    def predict(trained: TrainedModel, rows) -> np.ndarray:
        return Predictor(trained).predict(rows)

    def forecast(self, run: ForecastRun) -> float:
        """Next-period price from the newest window."""
        return float(self.predict(run.model, run.forecast_row)[0])
