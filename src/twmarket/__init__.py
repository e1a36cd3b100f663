"""twmarket - Taiwan market daily activity reports.

Fetches the daily reports published by TWSE (main board), TPEx (OTC
board) and TAIFEX (derivatives exchange) and normalizes them into small
typed records: trading volume/value, market breadth, institutional net
buy/sell, margin balances, derivative open interest by investor class
and large-trader concentration.

## Quick Start

```python
import asyncio

from twmarket import TaifexScraper, TwseScraper


async def main() -> None:
    async with TwseScraper() as twse:
        trades = await twse.fetch_market_trades("2024-01-02")

    async with TaifexScraper() as taifex:
        retail = await taifex.fetch_retail_mx_position("2024-01-02")

    # None means the exchange has not published data for that date
    if retail is not None:
        print(retail.to_dict())


asyncio.run(main())
```
"""

__version__ = "1.0.0"

from .core import (
    AppConfig,
    ConfigError,
    DecodeError,
    ParseError,
    TransportError,
    TwMarketError,
    configure_logging,
    get_config,
    get_logger,
    reload_config,
)
from .scrapers import TaifexScraper, TpexScraper, TwseScraper

__all__ = [
    # Version
    "__version__",
    # Core
    "AppConfig",
    "get_config",
    "reload_config",
    "get_logger",
    "configure_logging",
    # Errors
    "TwMarketError",
    "DecodeError",
    "ParseError",
    "TransportError",
    "ConfigError",
    # Scrapers
    "TwseScraper",
    "TpexScraper",
    "TaifexScraper",
]
