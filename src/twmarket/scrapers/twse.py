"""TWSE (main board) scraper."""

from __future__ import annotations

from datetime import date
from typing import Optional

from twmarket.core.errors import ConfigError, TwMarketError
from twmarket.models.records import (
    InstInvestorsTrades,
    ListedInstrument,
    MarginTransactions,
    MarketBreadth,
    MarketTrades,
)
from twmarket.parsers.decoding import parse_html_table
from twmarket.parsers.twse import (
    ListedInstrumentsParser,
    TwseInstInvestorsTradesParser,
    TwseMarginTransactionsParser,
    TwseMarketBreadthParser,
    TwseMarketTradesParser,
)
from twmarket.scrapers.base import BaseScraper
from twmarket.utils.metrics import reports_fetched


class TwseScraper(BaseScraper):
    """Scraper for TWSE after-trading reports and the ISIN instrument lists."""

    PROVIDER = "twse"
    REPORTS = {
        "market_trades": "fetch_market_trades",
        "market_breadth": "fetch_market_breadth",
        "inst_investors_trades": "fetch_inst_investors_trades",
        "margin_transactions": "fetch_margin_transactions",
    }

    # ISIN page query per market: listed shares, OTC shares
    LISTING_QUERIES = {
        "TSE": {"market": "1", "issuetype": "1"},
        "OTC": {"market": "2", "issuetype": "4"},
    }

    async def fetch_listed_instruments(self, market: str = "TSE") -> list[ListedInstrument]:
        """Fetch the instrument list for the main (TSE) or OTC board.

        Raises:
            ConfigError: If ``market`` is not TSE or OTC
        """
        query = self.LISTING_QUERIES.get(market.upper())
        if query is None:
            raise ConfigError(
                f"Unknown market {market!r}",
                recovery_hint=f"Use one of: {', '.join(self.LISTING_QUERIES)}",
            )

        self.logger.info("Fetching listed instruments", market=market.upper())
        try:
            payload = await self.transport.get_bytes(
                self.config.twse.listed_instruments_url, params=query
            )
            rows = parse_html_table(self.decode_legacy(payload), "table.h4 tr", skip_rows=1)
        except TwMarketError as e:
            reports_fetched.labels(
                provider=self.PROVIDER, report="listed_instruments", outcome="error"
            ).inc()
            raise e.with_context(provider=self.PROVIDER, report="listed_instruments")

        instruments = ListedInstrumentsParser().parse(rows)
        reports_fetched.labels(
            provider=self.PROVIDER, report="listed_instruments", outcome="present"
        ).inc()
        self.logger.info(
            "Listed instruments fetched", market=market.upper(), count=len(instruments)
        )
        return instruments

    async def fetch_market_trades(
        self, target_date: date | str | None = None
    ) -> Optional[MarketTrades]:
        """Market trading volume, value, transactions and index close."""

        async def produce(day: date) -> Optional[MarketTrades]:
            payload = await self.transport.get_json(
                self.config.twse.market_trades_url,
                params={"date": day.strftime("%Y%m%d"), "response": "json"},
            )
            return TwseMarketTradesParser().extract(payload, day)

        return await self.run_report("market_trades", target_date, produce)

    async def fetch_market_breadth(
        self, target_date: date | str | None = None
    ) -> Optional[MarketBreadth]:
        """Advancing/declining/unchanged counts."""

        async def produce(day: date) -> Optional[MarketBreadth]:
            payload = await self.transport.get_json(
                self.config.twse.market_breadth_url,
                params={"date": day.strftime("%Y%m%d"), "response": "json"},
            )
            return TwseMarketBreadthParser().extract(payload, day)

        return await self.run_report("market_breadth", target_date, produce)

    async def fetch_inst_investors_trades(
        self, target_date: date | str | None = None
    ) -> Optional[InstInvestorsTrades]:
        """Net buy/sell value of foreign investors, trusts and dealers."""

        async def produce(day: date) -> Optional[InstInvestorsTrades]:
            payload = await self.transport.get_json(
                self.config.twse.inst_investors_trades_url,
                params={"dayDate": day.strftime("%Y%m%d"), "type": "day", "response": "json"},
            )
            return TwseInstInvestorsTradesParser().extract(payload, day)

        return await self.run_report("inst_investors_trades", target_date, produce)

    async def fetch_margin_transactions(
        self, target_date: date | str | None = None
    ) -> Optional[MarginTransactions]:
        """Margin purchase and short sale balances with daily changes."""

        async def produce(day: date) -> Optional[MarginTransactions]:
            payload = await self.transport.get_json(
                self.config.twse.margin_transactions_url,
                params={"date": day.strftime("%Y%m%d"), "selectType": "MS", "response": "json"},
            )
            return TwseMarginTransactionsParser().extract(payload, day)

        return await self.run_report("margin_transactions", target_date, produce)
