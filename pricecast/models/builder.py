"""
Model Builder
Assembles and compiles the LSTM regressor described by a ModelConfig.
"""
import torch.nn as nn
import torch.optim as optim
import logging
from pydantic import BaseModel, ConfigDict
from typing import Dict

from ..contracts.config import ModelConfig
from ..errors import ConfigurationError
from .lstm_model import PriceLSTMNet, TrainedModel

logger = logging.getLogger(__name__)


class CompiledModel(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    net: nn.Module
    optimizer: optim.Optimizer
    loss_fn: nn.Module


class ModelBuilder:
    """
    Architecture (fixed by config, never searched):
    1. Linear(window_size -> input_neurons)
    2. Reshape to (recurrent_feature_width, timesteps)
    3. recurrent_layer_count stacked LSTM layers of recurrent_output_width
       units, last timestep only
    4. Linear(recurrent_output_width -> 1)

    Compiled with Adam at learning_rate and mean squared error.
    """
    def __init__(self, config: ModelConfig):
        self.config = config

    def validate(self):
        """Check the declared shapes before any torch object exists."""
        cfg = self.config
        for name in ('window_size', 'input_neurons', 'recurrent_feature_width',
                     'recurrent_layer_count', 'recurrent_output_width'):
            value = getattr(cfg, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

        if cfg.input_neurons % cfg.recurrent_feature_width != 0:
            raise ConfigurationError(
                f"input_neurons ({cfg.input_neurons}) is not divisible by "
                f"recurrent_feature_width ({cfg.recurrent_feature_width}); "
                f"timesteps would be {cfg.input_neurons / cfg.recurrent_feature_width:g}"
            )

    @property
    def timesteps(self) -> int:
        self.validate()
        return self.config.input_neurons // self.config.recurrent_feature_width

    def build(self) -> PriceLSTMNet:
        timesteps = self.timesteps
        cfg = self.config

        net = PriceLSTMNet(
            window_size=cfg.window_size,
            input_neurons=cfg.input_neurons,
            feature_width=cfg.recurrent_feature_width,
            timesteps=timesteps,
            num_layers=cfg.recurrent_layer_count,
            hidden_dim=cfg.recurrent_output_width,
        )

        total_params = sum(p.numel() for p in net.parameters())
        logger.info(f"Built LSTM regressor: input {cfg.window_size} -> {cfg.input_neurons} -> "
                    f"({cfg.recurrent_feature_width}, {timesteps}) -> "
                    f"{cfg.recurrent_layer_count}x LSTM({cfg.recurrent_output_width}) -> 1, "
                    f"{total_params:,} params")
        return net

    def compile(self, net: nn.Module) -> CompiledModel:
        return CompiledModel(
            net=net,
            optimizer=optim.Adam(net.parameters(), lr=self.config.learning_rate),
            loss_fn=nn.MSELoss(),
        )

    def build_and_compile(self) -> CompiledModel:
        return self.compile(self.build())

    def restore(self, state_dict: Dict) -> TrainedModel:
        """Rebuild a trained model from persisted weights."""
        net = self.build()
        net.load_state_dict(state_dict)
        net.eval()
        return TrainedModel(net=net, config=self.config)
