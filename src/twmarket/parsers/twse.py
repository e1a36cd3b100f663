"""Extractors for TWSE (main board) reports.

TWSE's rwd JSON endpoints answer ``{"stat": "OK", ...}`` when the date
has data and some other status text (e.g. "很抱歉，沒有符合條件的資料!")
otherwise.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from twmarket.core.errors import ParseError
from twmarket.features.composers import MarginLayout, compose_margin_transactions
from twmarket.models.records import (
    InstInvestorsTrades,
    ListedInstrument,
    MarginTransactions,
    MarketBreadth,
    MarketTrades,
)
from twmarket.parsers.base_parser import EnvelopeReportParser
from twmarket.parsers.decoding import RawTable
from twmarket.utils.calendar import parse_roc_date
from twmarket.utils.numerals import parse_number

_COUNT_WITH_LIMIT_RE = re.compile(r"^\s*([\d,]+)\s*\(\s*([\d,]+)\s*\)\s*$")


class TwseEnvelopeParser(EnvelopeReportParser):
    PROVIDER = "twse"
    STATUS_FIELD = "stat"
    OK_STATUS = "ok"


class DailyTradesParser(EnvelopeReportParser[MarketTrades]):
    """Shared row lookup for the FMTQIK/st41 daily trading index reports.

    The report lists every trading day of the month; the row whose ROC
    date equals the requested date is the one returned.
    """

    ROWS_MEMBER = "data"
    COLUMNS = {
        "date": 0,
        "trade_volume": 1,
        "trade_value": 2,
        "transaction": 3,
        "price": 4,
        "change": 5,
    }

    def parse_data(self, data: dict[str, Any], target_date: date) -> Optional[MarketTrades]:
        for row in self.section(data, self.ROWS_MEMBER):
            if parse_roc_date(self.text(row, self.COLUMNS["date"], "date")) != target_date:
                continue
            return MarketTrades(
                date=target_date,
                trade_volume=self.number(row, self.COLUMNS["trade_volume"], "tradeVolume"),
                trade_value=self.number(row, self.COLUMNS["trade_value"], "tradeValue"),
                transaction=self.number(row, self.COLUMNS["transaction"], "transaction"),
                price=self.number(row, self.COLUMNS["price"], "price"),
                change=self.number(row, self.COLUMNS["change"], "change"),
            )
        return self.absent("date not among returned rows")


class TwseMarketTradesParser(DailyTradesParser):
    PROVIDER = "twse"
    REPORT = "market_trades"
    STATUS_FIELD = "stat"


class TwseMarketBreadthParser(TwseEnvelopeParser):
    """Advance/decline counts from the MI_INDEX closing summary.

    ``tables[7]`` rows: up, down, unchanged, unmatched, not applicable.
    Column 2 is the stock-only count; up/down cells read ``"5,000(100)"``
    with the limit-move count in parentheses.
    """

    REPORT = "market_breadth"
    TABLE_INDEX = 7
    COUNT_COLUMN = 2
    ROWS = {"up": 0, "down": 1, "unchanged": 2, "unmatched": 3, "not_applicable": 4}

    def parse_data(self, data: dict[str, Any], target_date: date) -> Optional[MarketBreadth]:
        tables = self.section(data, "tables")
        if len(tables) <= self.TABLE_INDEX:
            raise ParseError(
                f"Breadth table {self.TABLE_INDEX} missing ({len(tables)} tables)",
                context={"member": "tables"},
            )
        rows = tables[self.TABLE_INDEX].get("data") or []
        if len(rows) <= max(self.ROWS.values()):
            raise ParseError(f"Breadth table has {len(rows)} rows", context={"member": "data"})

        def count(name: str) -> int:
            return self.integer(rows[self.ROWS[name]], self.COUNT_COLUMN, name)

        up, limit_up = self._split_limit(
            self.text(rows[self.ROWS["up"]], self.COUNT_COLUMN, "up"), "up"
        )
        down, limit_down = self._split_limit(
            self.text(rows[self.ROWS["down"]], self.COUNT_COLUMN, "down"), "down"
        )
        unmatched = count("unmatched") + count("not_applicable")

        return MarketBreadth(
            date=target_date,
            up=up,
            limit_up=limit_up,
            down=down,
            limit_down=limit_down,
            unchanged=count("unchanged"),
            unmatched=unmatched,
        )

    def _split_limit(self, text: Any, field: str) -> tuple[int, int]:
        match = _COUNT_WITH_LIMIT_RE.match(str(text))
        if not match:
            raise ParseError(
                f"Expected 'count(limit)' for {field}, got {text!r}",
                value=text,
                context={"field": field},
            )
        return int(parse_number(match.group(1))), int(parse_number(match.group(2)))


class TwseInstInvestorsTradesParser(TwseEnvelopeParser):
    """Net buy/sell by institution class from BFI82U.

    Rows (label dropped, buy/sell/net each): dealers proprietary, dealers
    hedging, investment trusts, foreign investors, foreign dealers, total.
    """

    REPORT = "inst_investors_trades"
    FINI = (11, 14)
    SITC = (8,)
    DEALERS = (2, 5)

    def parse_data(
        self, data: dict[str, Any], target_date: date
    ) -> Optional[InstInvestorsTrades]:
        values = self.flatten_values(self.section(data, "data"))

        def total(offsets: tuple[int, ...], field: str) -> int | float:
            return sum(self.value_at(values, i, field) for i in offsets)

        return InstInvestorsTrades(
            date=target_date,
            fini_net_buy_sell=total(self.FINI, "finiNetBuySell"),
            sitc_net_buy_sell=total(self.SITC, "sitcNetBuySell"),
            dealers_net_buy_sell=total(self.DEALERS, "dealersNetBuySell"),
        )


class TwseMarginTransactionsParser(TwseEnvelopeParser):
    """Market-wide margin summary from MI_MARGN ``tables[0]``.

    Rows (label dropped): margin purchases (lots), short sales (lots),
    margin purchases (NT$ thousands); each as buy, sell, repay, prior
    balance, today balance.
    """

    REPORT = "margin_transactions"
    LAYOUT = MarginLayout(
        margin_balance=4,
        margin_balance_prior=3,
        short_balance=9,
        short_balance_prior=8,
        margin_balance_value=14,
        margin_balance_value_prior=13,
    )

    def parse_data(
        self, data: dict[str, Any], target_date: date
    ) -> Optional[MarginTransactions]:
        tables = self.section(data, "tables")
        if not tables:
            raise ParseError("Margin summary table missing", context={"member": "tables"})
        values = self.flatten_values(tables[0].get("data") or [])
        return compose_margin_transactions(values, self.LAYOUT, target_date)


class ListedInstrumentsParser:
    """Instrument list from an ISIN class page (``table.h4`` rows).

    Category separator rows span the table with a single cell and are
    skipped.
    """

    COLUMNS = {"symbol": 2, "name": 3, "market": 4, "industry": 6}

    def parse(self, rows: RawTable) -> list[ListedInstrument]:
        width = max(self.COLUMNS.values()) + 1
        return [
            ListedInstrument(**{field: row[index] or "" for field, index in self.COLUMNS.items()})
            for row in rows
            if len(row) >= width
        ]
