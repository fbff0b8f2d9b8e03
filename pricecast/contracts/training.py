"""
Training Contracts
"""
from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional


class ProgressEvent(BaseModel):
    """Position of the fit loop, delivered to progress observers"""
    model_config = ConfigDict(frozen=True)

    epoch: int      # 1-based
    epochs: int
    batch: int      # 1-based, 0 before the first batch of an epoch
    batches: int
    loss: Optional[float] = None


class TrainingResult(BaseModel):
    """Outcome of one Trainer.fit call"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: Any  # models.lstm_model.TrainedModel
    history: List[float] = []
    elapsed_seconds: float = 0.0
