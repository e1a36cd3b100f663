"""Extractors for TPEx (OTC board) reports.

TPEx JSON endpoints carry an ``iTotalRecords`` count; zero means nothing
was published for the requested date.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from twmarket.features.composers import MarginLayout, compose_margin_transactions
from twmarket.models.records import InstInvestorsTrades, MarginTransactions, MarketBreadth
from twmarket.parsers.base_parser import EnvelopeReportParser
from twmarket.parsers.twse import DailyTradesParser
from twmarket.utils.numerals import is_numeral, parse_number


class TpexEnvelopeParser(EnvelopeReportParser):
    PROVIDER = "tpex"
    COUNT_FIELD = "iTotalRecords"


class TpexMarketTradesParser(DailyTradesParser):
    PROVIDER = "tpex"
    REPORT = "market_trades"
    COUNT_FIELD = "iTotalRecords"
    ROWS_MEMBER = "aaData"


class TpexMarketBreadthParser(TpexEnvelopeParser):
    """Advance/decline counts from the market highlight envelope."""

    REPORT = "market_breadth"
    FIELDS = {
        "up": "upNum",
        "limit_up": "upStopNum",
        "down": "downNum",
        "limit_down": "downStopNum",
        "unchanged": "noChangeNum",
        "unmatched": "matchedNum",
    }

    def parse_data(self, data: dict[str, Any], target_date: date) -> Optional[MarketBreadth]:
        counts = {}
        for field, member in self.FIELDS.items():
            counts[field] = self.integer([self.section(data, member)], 0, member)
        return MarketBreadth(date=target_date, **counts)


class TpexInstInvestorsTradesParser(TpexEnvelopeParser):
    """Net buy/sell by institution class from the 3itridsum summary."""

    REPORT = "inst_investors_trades"
    FINI = 2
    SITC = 11
    DEALERS = 14

    def parse_data(
        self, data: dict[str, Any], target_date: date
    ) -> Optional[InstInvestorsTrades]:
        values = self.flatten_values(self.section(data, "aaData"))
        return InstInvestorsTrades(
            date=target_date,
            fini_net_buy_sell=self.value_at(values, self.FINI, "finiNetBuySell"),
            sitc_net_buy_sell=self.value_at(values, self.SITC, "sitcNetBuySell"),
            dealers_net_buy_sell=self.value_at(values, self.DEALERS, "dealersNetBuySell"),
        )


class TpexMarginTransactionsParser(TpexEnvelopeParser):
    """Market-wide margin totals from the two footer rows.

    The footers mix label and blank cells with the numbers; those are
    dropped before the offsets below apply.
    """

    REPORT = "margin_transactions"
    FOOTERS = ("tfootData_one", "tfootData_two")
    LAYOUT = MarginLayout(
        margin_balance=4,
        margin_balance_prior=0,
        short_balance=9,
        short_balance_prior=5,
        margin_balance_value=14,
        margin_balance_value_prior=10,
    )

    def parse_data(
        self, data: dict[str, Any], target_date: date
    ) -> Optional[MarginTransactions]:
        cells = [c for footer in self.FOOTERS for c in self.section(data, footer)]
        values = [parse_number(c) for c in cells if is_numeral(c)]
        return compose_margin_transactions(values, self.LAYOUT, target_date)
