"""Provider scrapers (source orchestrators).

- `twse.py`: Taiwan Stock Exchange (main board)
- `tpex.py`: Taipei Exchange (OTC board)
- `taifex.py`: Taiwan Futures Exchange
- `transport.py`: async HTTP transport
"""

from .base import BaseScraper
from .taifex import TaifexScraper
from .tpex import TpexScraper
from .transport import HttpTransport
from .twse import TwseScraper

SCRAPERS: dict[str, type[BaseScraper]] = {
    TwseScraper.PROVIDER: TwseScraper,
    TpexScraper.PROVIDER: TpexScraper,
    TaifexScraper.PROVIDER: TaifexScraper,
}

__all__ = [
    "BaseScraper",
    "HttpTransport",
    "SCRAPERS",
    "TaifexScraper",
    "TpexScraper",
    "TwseScraper",
]
