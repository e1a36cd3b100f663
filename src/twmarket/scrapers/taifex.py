"""TAIFEX (derivatives exchange) scraper.

Every TAIFEX report is a form POST answered with a Big5 CSV download.
The retail position report is derived from two downloads fetched
concurrently.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Optional

from twmarket.features.composers import compose_retail_position
from twmarket.models.records import (
    InstInvestorsMxfOi,
    InstInvestorsTxfTrades,
    InstInvestorsTxoTrades,
    LargeTradersTxPosition,
    MxfMarketOi,
    RetailMxPosition,
)
from twmarket.parsers.decoding import RawTable, parse_tabular
from twmarket.parsers.taifex import (
    InstInvestorsMxfOiParser,
    InstInvestorsTxfParser,
    InstInvestorsTxoParser,
    LargeTradersTxParser,
    MxfMarketOiParser,
)
from twmarket.scrapers.base import BaseScraper
from twmarket.utils.calendar import years_before


class TaifexScraper(BaseScraper):
    """Scraper for TAIFEX investor-class and large-trader reports."""

    PROVIDER = "taifex"
    REPORTS = {
        "inst_investors_txf_trades": "fetch_inst_investors_txf_trades",
        "inst_investors_txo_trades": "fetch_inst_investors_txo_trades",
        "mxf_market_oi": "fetch_mxf_market_oi",
        "inst_investors_mxf_oi": "fetch_inst_investors_mxf_oi",
        "retail_mx_position": "fetch_retail_mx_position",
        "large_traders_tx_position": "fetch_large_traders_tx_position",
    }

    async def _download_table(self, url: str, form: dict[str, str]) -> RawTable:
        """POST a query form and tokenize the CSV answer.

        Dates without data get an HTML notice page instead of CSV; that
        comes back as an empty table so the extractor reports absence.
        """
        text = self.decode_legacy(await self.transport.post_form(url, form))
        if text.lstrip().startswith("<"):
            self.logger.debug("Markup instead of CSV", url=url)
            return []
        return parse_tabular(text, has_header=False, as_rows=True)

    def _date_range_form(self, day: date, commodity_id: str) -> dict[str, str]:
        """Query form for the investor-class downloads, with the lookback window."""
        query_date = day.strftime("%Y/%m/%d")
        first_date = years_before(day, self.config.taifex.lookback_years)
        return {
            "queryStartDate": query_date,
            "queryEndDate": query_date,
            "commodityId": commodity_id,
            "firstDate": first_date.strftime("%Y/%m/%d 00:00"),
            "lastDate": day.strftime("%Y/%m/%d 00:00"),
        }

    async def fetch_inst_investors_txf_trades(
        self, target_date: date | str | None = None
    ) -> Optional[InstInvestorsTxfTrades]:
        """TAIEX futures net open interest of dealers, trusts and foreign investors."""

        async def produce(day: date) -> Optional[InstInvestorsTxfTrades]:
            table = await self._download_table(
                self.config.taifex.fut_contracts_url, self._date_range_form(day, "TXF")
            )
            return InstInvestorsTxfParser().extract(table, day)

        return await self.run_report("inst_investors_txf_trades", target_date, produce)

    async def fetch_inst_investors_txo_trades(
        self, target_date: date | str | None = None
    ) -> Optional[InstInvestorsTxoTrades]:
        """TAIEX options calls/puts net open interest by investor class."""

        async def produce(day: date) -> Optional[InstInvestorsTxoTrades]:
            table = await self._download_table(
                self.config.taifex.calls_and_puts_url, self._date_range_form(day, "TXO")
            )
            return InstInvestorsTxoParser().extract(table, day)

        return await self.run_report("inst_investors_txo_trades", target_date, produce)

    async def fetch_mxf_market_oi(
        self, target_date: date | str | None = None
    ) -> Optional[MxfMarketOi]:
        """Total mini-TAIEX futures open interest."""

        async def produce(day: date) -> Optional[MxfMarketOi]:
            query_date = day.strftime("%Y/%m/%d")
            form = {
                "down_type": "1",
                "queryStartDate": query_date,
                "queryEndDate": query_date,
                "commodity_id": "MTX",
            }
            table = await self._download_table(self.config.taifex.fut_data_url, form)
            return MxfMarketOiParser().extract(table, day)

        return await self.run_report("mxf_market_oi", target_date, produce)

    async def fetch_inst_investors_mxf_oi(
        self, target_date: date | str | None = None
    ) -> Optional[InstInvestorsMxfOi]:
        """Mini-TAIEX futures long/short open interest of the three institution classes."""

        async def produce(day: date) -> Optional[InstInvestorsMxfOi]:
            query_date = day.strftime("%Y/%m/%d")
            form = {
                "queryStartDate": query_date,
                "queryEndDate": query_date,
                "commodityId": "MXF",
            }
            table = await self._download_table(self.config.taifex.fut_contracts_url, form)
            return InstInvestorsMxfOiParser().extract(table, day)

        return await self.run_report("inst_investors_mxf_oi", target_date, produce)

    async def fetch_retail_mx_position(
        self, target_date: date | str | None = None
    ) -> Optional[RetailMxPosition]:
        """Retail mini-TAIEX positioning derived from market and institutional OI.

        Both constituent downloads run concurrently and both must finish
        before the join. Absence of either yields None. A failure of either
        cancels the other and propagates unchanged.
        """

        async def produce(day: date) -> Optional[RetailMxPosition]:
            try:
                async with asyncio.TaskGroup() as tg:
                    market_task = tg.create_task(self.fetch_mxf_market_oi(day))
                    inst_task = tg.create_task(self.fetch_inst_investors_mxf_oi(day))
            except ExceptionGroup as eg:
                raise eg.exceptions[0] from None

            market, institutional = market_task.result(), inst_task.result()
            if market is None or institutional is None:
                return None
            return compose_retail_position(market, institutional)

        return await self.run_report("retail_mx_position", target_date, produce)

    async def fetch_large_traders_tx_position(
        self, target_date: date | str | None = None
    ) -> Optional[LargeTradersTxPosition]:
        """Top-ten trader TAIEX futures net positions, specific vs non-specific."""

        async def produce(day: date) -> Optional[LargeTradersTxPosition]:
            query_date = day.strftime("%Y/%m/%d")
            form = {"queryStartDate": query_date, "queryEndDate": query_date}
            table = await self._download_table(self.config.taifex.large_traders_url, form)
            return LargeTradersTxParser().extract(table, day)

        return await self.run_report("large_traders_tx_position", target_date, produce)
