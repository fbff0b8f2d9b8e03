"""
pricecast Data Contracts
Pydantic models for system boundaries.
"""
from .config import (
    AggregateMode,
    AppConfig,
    DataConfig,
    LabelMode,
    LoggingConfig,
    ModelConfig,
    ProviderConfig,
    load_config,
)
from .data import Observation, TickerMetadata, Window
from .training import ProgressEvent, TrainingResult
