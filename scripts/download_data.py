import os
import sys

from pricecast.contracts.config import load_config
from pricecast.data.providers import TiingoClient, observations_to_frame


def main():
    config = load_config(os.environ.get("PRICECAST_CONFIG", "config/config.yaml"))

    if not config.provider.has_token:
        print("Error: Please set your Tiingo API token in config/config.yaml or TIINGO_API_TOKEN")
        return 1

    client = TiingoClient(config.provider)
    symbols = sys.argv[1:] or [config.data.default_ticker]

    os.makedirs("data/raw", exist_ok=True)

    for symbol in symbols:
        print(f"Fetching {symbol}...")
        history = client.fetch_history(symbol)

        if history is None:
            print(f"Failed to fetch {symbol}")
            continue

        df = observations_to_frame(history)
        filename = f"data/raw/{symbol.lower()}_daily.csv"
        df.to_csv(filename)
        print(f"Saved {len(df)} rows to {filename}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
