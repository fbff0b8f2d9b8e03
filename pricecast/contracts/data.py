"""
Data Contracts
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Tuple
from datetime import datetime


class Observation(BaseModel):
    """One trading day of a price history - boundary contract.

    Accepts the provider's camelCase keys (``adjClose``, ``divCash``...) as
    well as the snake_case field names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    date: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float

    # Split/dividend adjusted values
    adj_open: Optional[float] = Field(default=None, alias="adjOpen")
    adj_high: Optional[float] = Field(default=None, alias="adjHigh")
    adj_low: Optional[float] = Field(default=None, alias="adjLow")
    adj_close: Optional[float] = Field(default=None, alias="adjClose")
    adj_volume: Optional[float] = Field(default=None, alias="adjVolume")
    div_cash: Optional[float] = Field(default=None, alias="divCash")
    split_factor: Optional[float] = Field(default=None, alias="splitFactor")


class TickerMetadata(BaseModel):
    """Descriptive fields for a symbol. Used for display only."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    ticker: str
    name: str = ""
    description: Optional[str] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    exchange_code: Optional[str] = Field(default=None, alias="exchangeCode")


class Window(BaseModel):
    """W consecutive observations, oldest first, plus an optional aggregate."""
    model_config = ConfigDict(frozen=True)

    observations: Tuple[Observation, ...]
    aggregate: Optional[float] = None

    def __len__(self) -> int:
        return len(self.observations)

    @property
    def first(self) -> Observation:
        return self.observations[0]

    @property
    def last(self) -> Observation:
        return self.observations[-1]
