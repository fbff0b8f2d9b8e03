"""
Sliding Window Builder
Turns a chronological observation series into fixed-length windows.
"""
import logging
from typing import Callable, Dict, List, Optional, Sequence

from ..contracts.config import AggregateMode
from ..contracts.data import Observation, Window
from ..errors import ConfigurationError, DataError

logger = logging.getLogger(__name__)


def field_value(observation: Observation, field: str) -> float:
    """Read a price field, failing loudly when the provider left it empty."""
    value = getattr(observation, field)
    if value is None:
        raise DataError(f"Observation {observation.date.date()} has no '{field}' value")
    return float(value)


def simple_moving_average(observations: Sequence[Observation], field: str) -> float:
    """Arithmetic mean of ``field`` across the window."""
    return sum(field_value(o, field) for o in observations) / len(observations)


def repeat_first_average(observations: Sequence[Observation], field: str) -> float:
    """
    Reference moving average kept for parity with models trained by the
    original tool: the running sum never advances past the first element, so
    the result is the first observation's value.
    """
    total = 0.0
    for _ in range(len(observations)):
        total += field_value(observations[0], field)
    return total / len(observations)


AGGREGATES: Dict[AggregateMode, Callable[[Sequence[Observation], str], float]] = {
    AggregateMode.MEAN: simple_moving_average,
    AggregateMode.REPEAT_FIRST: repeat_first_average,
}


def create_windows(observations: Sequence[Observation],
                   window_size: int = 12,
                   aggregate_field: Optional[str] = None,
                   aggregate_mode: AggregateMode = AggregateMode.MEAN) -> List[Window]:
    """
    Build every full window of ``window_size`` consecutive observations.

    Window i holds observations[i:i + window_size]. There are no partial tail
    windows, so a series shorter than the window yields an empty list; the
    caller decides whether that is an error.

    Args:
        observations: Series sorted oldest first
        window_size: Observations per window (W)
        aggregate_field: If set, attach the aggregate of this field to each window
        aggregate_mode: How the aggregate is computed

    Returns:
        max(0, N - W + 1) windows in chronological order
    """
    if window_size < 1:
        raise ConfigurationError(f"window_size must be >= 1, got {window_size}")

    aggregate_fn = AGGREGATES[AggregateMode(aggregate_mode)] if aggregate_field else None

    windows = []
    for i in range(len(observations) - window_size + 1):
        chunk = tuple(observations[i:i + window_size])
        aggregate = aggregate_fn(chunk, aggregate_field) if aggregate_fn else None
        windows.append(Window(observations=chunk, aggregate=aggregate))

    if not windows:
        logger.warning(f"{len(observations)} observations < window size {window_size}, no windows built")
    else:
        logger.info(f"Built {len(windows)} windows of {window_size} observations")

    return windows
