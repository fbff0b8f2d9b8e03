"""
Configuration Contracts
"""
import os
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Literal, Optional
from enum import Enum

from ..errors import ConfigurationError

PriceField = Literal[
    "open", "high", "low", "close",
    "adj_open", "adj_high", "adj_low", "adj_close",
]

TOKEN_PLACEHOLDER = "YOUR_TIINGO_API_TOKEN"


class LabelMode(str, Enum):
    NEXT_VALUE = "next_value"
    WINDOW_AGGREGATE = "window_aggregate"


class AggregateMode(str, Enum):
    MEAN = "mean"
    # Reads the first element W times; kept for parity with older models
    REPEAT_FIRST = "repeat_first"


class ModelConfig(BaseModel):
    """LSTM regressor configuration. Stored alongside every trained model."""
    model_config = ConfigDict(frozen=True)

    window_size: int = Field(default=12, ge=1)
    input_neurons: int = Field(default=100, ge=1)
    recurrent_feature_width: int = Field(default=10, ge=1)
    recurrent_layer_count: int = Field(default=3, ge=1)
    recurrent_output_width: int = Field(default=20, ge=1)
    learning_rate: float = Field(default=0.0016, gt=0)
    epochs: int = Field(default=100, ge=1)
    batch_size: int = Field(default=12, ge=1)
    normalization_divisor: float = Field(default=10.0, gt=0)

    @field_validator('learning_rate')
    @classmethod
    def lr_reasonable(cls, v):
        if v > 0.1:
            raise ValueError('learning_rate too high, likely a mistake')
        return v


class DataConfig(BaseModel):
    """Windowing, labeling and split settings"""
    default_ticker: str = "TSLA"
    split_fraction: float = Field(default=0.8, gt=0, le=1)
    price_field: PriceField = "adj_close"
    target_field: PriceField = "adj_close"
    label_mode: LabelMode = LabelMode.NEXT_VALUE
    aggregate_mode: AggregateMode = AggregateMode.MEAN
    models_dir: str = "models"


class ProviderConfig(BaseModel):
    """Tiingo endpoints. URLs are templated with {ticker} and {token}."""
    history_url: str = (
        "https://api.tiingo.com/tiingo/daily/{ticker}/prices"
        "?startDate=1000-1-1&endDate=9999-1-1&token={token}"
    )
    metadata_url: str = "https://api.tiingo.com/tiingo/daily/{ticker}?token={token}"
    token: str = TOKEN_PLACEHOLDER
    timeout: float = Field(default=30.0, gt=0)

    @property
    def has_token(self) -> bool:
        return bool(self.token) and self.token != TOKEN_PLACEHOLDER


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False
    tensorboard: bool = False
    log_dir: str = "logs"


class AppConfig(BaseModel):
    """Full application config - YAML contract"""
    data: DataConfig = Field(default_factory=DataConfig)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: str) -> AppConfig:
    """Load and validate the YAML config.

    Missing sections fall back to defaults. ``TIINGO_API_TOKEN`` in the
    environment overrides ``provider.token``.
    """
    with open(path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    token = os.environ.get("TIINGO_API_TOKEN")
    if token:
        raw_config['provider'] = dict(raw_config.get('provider') or {}, token=token)

    try:
        return AppConfig(**raw_config)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config {path}: {e}") from e
