import argparse
import logging
import os
import sys
from datetime import timedelta
from pathlib import Path

from .contracts.config import AppConfig, load_config
from .data.providers import TiingoClient
from .data.storage import ModelStorage
from .data.validator import SeriesValidator
from .forecast_pipeline import ForecastPipeline
from .training.observers import CompositeObserver, LoggingProgressObserver, TensorBoardObserver
from .utils.logger import setup_logger

DEFAULT_CONFIG_PATH = "config/config.yaml"


def read_config(path: str) -> AppConfig:
    if not Path(path).exists():
        return AppConfig()
    return load_config(path)


def parse_args(argv=None, default_ticker: str = "TSLA"):
    parser = argparse.ArgumentParser(description='Forecast the next closing price of a ticker')
    parser.add_argument('ticker', nargs='?', default=default_ticker,
                        help=f'Ticker symbol (default: {default_ticker})')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    config_path = os.environ.get("PRICECAST_CONFIG", DEFAULT_CONFIG_PATH)
    config = read_config(config_path)
    args = parse_args(argv, config.data.default_ticker)

    # Setup Logging
    log_cfg = config.logging
    setup_logger(None, level=log_cfg.level, log_file=log_cfg.log_file, json_format=log_cfg.json_format)
    logger = logging.getLogger("pricecast")

    if not config.provider.has_token:
        logger.critical(f"No Tiingo API token: set provider.token in {config_path} or TIINGO_API_TOKEN")
        return 1

    client = TiingoClient(config.provider)

    logger.info(f"Fetching data for {args.ticker}")
    company = client.fetch_metadata(args.ticker)
    if company is None:
        logger.error(f"The ticker {args.ticker} is invalid")
        return 1

    logger.info(f"Resolved {company.ticker} ({company.name}, {company.exchange_code})")

    history = client.fetch_history(company.ticker)
    if history is None:
        logger.error(f"Could not fetch price history for {company.ticker}")
        return 1

    SeriesValidator(config.data.price_field).validate(history, company.ticker)

    observers = [LoggingProgressObserver(logger)]
    tensorboard = None
    if log_cfg.tensorboard:
        tensorboard = TensorBoardObserver(str(Path(log_cfg.log_dir) / company.ticker.lower()))
        observers.append(tensorboard)

    pipeline = ForecastPipeline(config, observer=CompositeObserver(observers))
    try:
        run = pipeline.train(history)
    finally:
        if tensorboard:
            tensorboard.close()

    storage = ModelStorage(config.data.models_dir)
    path = storage.save(run.model, company.ticker, run.result.history)
    logger.info(f"Saved model to {path.resolve()}")

    tomorrow = (run.last_date + timedelta(days=1)).date().isoformat()
    prediction = pipeline.forecast(run)
    logger.info(f"The price of {company.ticker} for {tomorrow} EOD is estimated at ${prediction:,.2f}")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
