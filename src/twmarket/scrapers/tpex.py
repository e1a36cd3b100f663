"""TPEx (OTC board) scraper.

TPEx query strings take the date in ROC form (``d=113/01/02``).
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from twmarket.models.records import (
    InstInvestorsTrades,
    MarginTransactions,
    MarketBreadth,
    MarketTrades,
)
from twmarket.parsers.tpex import (
    TpexInstInvestorsTradesParser,
    TpexMarginTransactionsParser,
    TpexMarketBreadthParser,
    TpexMarketTradesParser,
)
from twmarket.scrapers.base import BaseScraper
from twmarket.utils.calendar import format_roc_date


class TpexScraper(BaseScraper):
    """Scraper for TPEx after-trading reports."""

    PROVIDER = "tpex"
    REPORTS = {
        "market_trades": "fetch_market_trades",
        "market_breadth": "fetch_market_breadth",
        "inst_investors_trades": "fetch_inst_investors_trades",
        "margin_transactions": "fetch_margin_transactions",
    }

    def _query(self, day: date, **extra: str) -> dict[str, str]:
        return {"d": format_roc_date(day), **extra, "o": "json"}

    async def fetch_market_trades(
        self, target_date: date | str | None = None
    ) -> Optional[MarketTrades]:
        """OTC trading volume, value, transactions and index close."""

        async def produce(day: date) -> Optional[MarketTrades]:
            payload = await self.transport.get_json(
                self.config.tpex.market_trades_url, params=self._query(day)
            )
            return TpexMarketTradesParser().extract(payload, day)

        return await self.run_report("market_trades", target_date, produce)

    async def fetch_market_breadth(
        self, target_date: date | str | None = None
    ) -> Optional[MarketBreadth]:
        """OTC advancing/declining/unchanged counts."""

        async def produce(day: date) -> Optional[MarketBreadth]:
            payload = await self.transport.get_json(
                self.config.tpex.market_breadth_url, params=self._query(day)
            )
            return TpexMarketBreadthParser().extract(payload, day)

        return await self.run_report("market_breadth", target_date, produce)

    async def fetch_inst_investors_trades(
        self, target_date: date | str | None = None
    ) -> Optional[InstInvestorsTrades]:
        """OTC net buy/sell of foreign investors, trusts and dealers."""

        async def produce(day: date) -> Optional[InstInvestorsTrades]:
            payload = await self.transport.get_json(
                self.config.tpex.inst_investors_trades_url, params=self._query(day, t="D")
            )
            return TpexInstInvestorsTradesParser().extract(payload, day)

        return await self.run_report("inst_investors_trades", target_date, produce)

    async def fetch_margin_transactions(
        self, target_date: date | str | None = None
    ) -> Optional[MarginTransactions]:
        """OTC margin purchase and short sale balances with daily changes."""

        async def produce(day: date) -> Optional[MarginTransactions]:
            payload = await self.transport.get_json(
                self.config.tpex.margin_transactions_url, params=self._query(day)
            )
            return TpexMarginTransactionsParser().extract(payload, day)

        return await self.run_report("margin_transactions", target_date, produce)
