"""Synthetic price series shared by the test modules."""
from datetime import datetime, timedelta

from pricecast.contracts.config import ModelConfig
from pricecast.contracts.data import Observation


def make_observations(n, start=100.0, step=1.0, first_date=datetime(2024, 1, 1)):
    """Daily observations whose close/adj_close rise by ``step`` each day."""
    observations = []
    for i in range(n):
        price = start + i * step
        observations.append(Observation(
            date=first_date + timedelta(days=i),
            open=price - 0.5,
            high=price + 1.0,
            low=price - 1.0,
            close=price,
            volume=1000 + i,
            adj_close=price,
            adj_open=price - 0.5,
            adj_high=price + 1.0,
            adj_low=price - 1.0,
            adj_volume=1000 + i,
        ))
    return observations


def small_model_config(**overrides):
    """A model small enough to fit in a unit test."""
    params = dict(
        window_size=4,
        input_neurons=8,
        recurrent_feature_width=2,
        recurrent_layer_count=1,
        recurrent_output_width=4,
        learning_rate=0.01,
        epochs=2,
        batch_size=4,
        normalization_divisor=10.0,
    )
    params.update(overrides)
    return ModelConfig(**params)
