import requests
import pandas as pd
import logging
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from ..contracts.config import ProviderConfig
from ..contracts.data import Observation, TickerMetadata
from ..errors import NetworkError


class TiingoClient:
    """
    Daily price history and ticker metadata from Tiingo.

    Failures are logged and returned as None; nothing is retried.
    """
    def __init__(self, config: ProviderConfig):
        self.config = config
        self.logger = logging.getLogger("TiingoClient")

    def format_url(self, template: str, ticker: str) -> str:
        return template.format(ticker=ticker, token=self.config.token)

    def _get(self, url: str) -> requests.Response:
        try:
            response = requests.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            # requests puts the full URL, token included, in its messages
            message = str(e).replace(self.config.token, "***") if self.config.token else str(e)
            raise NetworkError(message) from e
        return response

    def _get_json(self, url: str) -> Tuple[Any, int]:
        """Decoded body and its size in bytes."""
        response = self._get(url)
        try:
            return response.json(), len(response.content)
        except ValueError as e:
            raise NetworkError(f"Malformed JSON body: {e}") from e

    def fetch_metadata(self, ticker: str) -> Optional[TickerMetadata]:
        """
        Fetches descriptive fields (name, exchange, date range) for a ticker.

        Returns:
            None if the ticker cannot be resolved
        """
        url = self.format_url(self.config.metadata_url, ticker)
        try:
            data, _ = self._get_json(url)
            return TickerMetadata(**data)
        except NetworkError as e:
            self.logger.error(f"Metadata lookup failed for {ticker}: {e}")
        except (TypeError, ValidationError) as e:
            self.logger.error(f"Unexpected metadata payload for {ticker}: {e}")
        return None

    def fetch_history(self, ticker: str) -> Optional[List[Observation]]:
        """
        Fetches the full daily price history of a ticker, oldest first.

        Returns:
            List of observations, or None if the request failed
        """
        url = self.format_url(self.config.history_url, ticker)
        self.logger.info(f"Fetching price history for {ticker}...")

        try:
            data, size = self._get_json(url)
            observations = [Observation(**day) for day in data]
        except NetworkError as e:
            self.logger.error(f"History request failed for {ticker}: {e}")
            return None
        except (TypeError, ValidationError) as e:
            self.logger.error(f"Unexpected history payload for {ticker}: {e}")
            return None

        self.logger.info(f"Fetched {len(observations)} entries ({size / 1024:.2f} KB) for {ticker}")
        return observations


def observations_to_frame(observations: Sequence[Observation]) -> pd.DataFrame:
    """Observations as a DataFrame indexed by date, snake_case columns."""
    df = pd.DataFrame([o.model_dump() for o in observations])
    if df.empty:
        return df
    df['date'] = pd.to_datetime(df['date'], utc=True)
    df.set_index('date', inplace=True)
    return df
