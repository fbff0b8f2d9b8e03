import torch
import torch.nn as nn
from pydantic import BaseModel, ConfigDict

from ..contracts.config import ModelConfig


class PriceLSTMNet(nn.Module):
    """
    Dense -> reshape -> stacked LSTM -> dense regressor.

    The dense input layer widens a W-price window to ``input_neurons`` values,
    which are reshaped to (feature_width, timesteps). The LSTM walks the first
    axis as its sequence and reads the second as per-step features.
    """
    def __init__(self, window_size, input_neurons, feature_width, timesteps, num_layers, hidden_dim):
        super(PriceLSTMNet, self).__init__()
        self.feature_width = feature_width
        self.timesteps = timesteps
        self.hidden_dim = hidden_dim
        self.num_layers = num_layers

        self.input = nn.Linear(window_size, input_neurons)
        self.lstm = nn.LSTM(timesteps, hidden_dim, num_layers, batch_first=True)
        self.fc = nn.Linear(hidden_dim, 1)

    def forward(self, x):
        out = self.input(x)
        out = out.view(x.size(0), self.feature_width, self.timesteps)

        h0 = torch.zeros(self.num_layers, x.size(0), self.hidden_dim).to(x.device)
        c0 = torch.zeros(self.num_layers, x.size(0), self.hidden_dim).to(x.device)

        out, _ = self.lstm(out, (h0, c0))
        return self.fc(out[:, -1, :])  # Take last time step


class TrainedModel(BaseModel):
    """Fitted network plus the config (and so the divisor) it was trained with."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    net: nn.Module
    config: ModelConfig

    @property
    def normalization_divisor(self) -> float:
        return self.config.normalization_divisor
