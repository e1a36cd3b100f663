"""Extractors for TAIFEX (derivatives exchange) CSV downloads.

Downloads are Big5 CSV with a caption row first. The caption's first
cell is the only signal that the file carries data: for dates with
nothing published TAIFEX returns an HTML notice instead.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from twmarket.features.composers import (
    LargeTraderPositions,
    net_large_trader_positions,
)
from twmarket.models.records import (
    InstInvestorsMxfOi,
    InstInvestorsTxfTrades,
    InstInvestorsTxoTrades,
    LargeTradersTxPosition,
    MxfMarketOi,
)
from twmarket.parsers.base_parser import TabularReportParser
from twmarket.parsers.decoding import RawTable


class TaifexParser(TabularReportParser):
    PROVIDER = "taifex"
    HEADER_MARKER = "日期"


class InstInvestorsTxfParser(TaifexParser):
    """TAIEX futures net open interest per institution class.

    Rows after the caption: dealers, investment trusts, foreign investors.
    """

    REPORT = "inst_investors_txf_trades"
    ROWS = {"dealers": 0, "sitc": 1, "fini": 2}
    NET_OI = 13

    def parse_rows(self, rows: RawTable, target_date: date) -> Optional[InstInvestorsTxfTrades]:
        dealers = self.row(rows, self.ROWS["dealers"], "dealers")
        sitc = self.row(rows, self.ROWS["sitc"], "sitc")
        fini = self.row(rows, self.ROWS["fini"], "fini")
        return InstInvestorsTxfTrades(
            date=target_date,
            fini_txf_net_oi=self.integer(fini, self.NET_OI, "finiTxfNetOi"),
            sitc_tx_net_oi=self.integer(sitc, self.NET_OI, "sitcTxNetOi"),
            dealers_txf_net_oi=self.integer(dealers, self.NET_OI, "dealersTxfNetOi"),
        )


class InstInvestorsTxoParser(TaifexParser):
    """TAIEX options net open interest (contracts and value) per class and side."""

    REPORT = "inst_investors_txo_trades"
    ROWS = {
        "dealers_calls": 0,
        "sitc_calls": 1,
        "fini_calls": 2,
        "dealers_puts": 3,
        "sitc_puts": 4,
        "fini_puts": 5,
    }
    NET_OI = 14
    NET_OI_VALUE = 15

    def parse_rows(self, rows: RawTable, target_date: date) -> Optional[InstInvestorsTxoTrades]:
        fields: dict[str, int | float] = {}
        for key, index in self.ROWS.items():
            investor, side = key.split("_")
            row = self.row(rows, index, key)
            prefix = f"{investor}_txo_{side}"
            fields[f"{prefix}_net_oi"] = self.integer(row, self.NET_OI, f"{prefix}_net_oi")
            fields[f"{prefix}_net_oi_value"] = self.number(
                row, self.NET_OI_VALUE, f"{prefix}_net_oi_value"
            )
        return InstInvestorsTxoTrades(date=target_date, **fields)


class MxfMarketOiParser(TaifexParser):
    """Total mini-TAIEX open interest across contract months.

    Only regular-session rows with a spread-volume cell are summed; the
    after-hours session repeats the same contracts.
    """

    REPORT = "mxf_market_oi"
    HEADER_MARKER = "交易日期"
    OPEN_INTEREST = 11
    SESSION = 17
    SPREAD_VOLUME = 18
    REGULAR_SESSION = "一般"

    def parse_rows(self, rows: RawTable, target_date: date) -> Optional[MxfMarketOi]:
        market_oi = 0
        for row in rows:
            if len(row) <= self.SPREAD_VOLUME:
                continue
            if row[self.SESSION] != self.REGULAR_SESSION or not row[self.SPREAD_VOLUME]:
                continue
            market_oi += self.integer(row, self.OPEN_INTEREST, "mxfMarketOi")
        return MxfMarketOi(date=target_date, mxf_market_oi=market_oi)


class InstInvestorsMxfOiParser(TaifexParser):
    """Mini-TAIEX long and short open interest summed over the three classes."""

    REPORT = "inst_investors_mxf_oi"
    ROWS = {"dealers": 0, "sitc": 1, "fini": 2}
    LONG_OI = 9
    SHORT_OI = 11

    def parse_rows(self, rows: RawTable, target_date: date) -> Optional[InstInvestorsMxfOi]:
        long_oi = 0
        short_oi = 0
        for investor, index in self.ROWS.items():
            row = self.row(rows, index, investor)
            long_oi += self.integer(row, self.LONG_OI, f"{investor}LongOi")
            short_oi += self.integer(row, self.SHORT_OI, f"{investor}ShortOi")
        return InstInvestorsMxfOi(
            date=target_date,
            inst_investors_mxf_long_oi=long_oi,
            inst_investors_mxf_short_oi=short_oi,
        )


class LargeTradersTxParser(TaifexParser):
    """Top-ten trader TAIEX futures positions.

    Of the TXF rows, offsets 2-5 are front month (all traders, specific
    traders) then all months (all traders, specific traders). The
    all-months row also carries total market open interest.
    """

    REPORT = "large_traders_tx_position"
    CONTRACT = 1
    CONTRACT_CODE = "TXF"
    ROWS = {
        "front_month": 2,
        "specific_front_month": 3,
        "all_months": 4,
        "specific_all_months": 5,
    }
    TOP_TEN_LONG = 7
    TOP_TEN_SHORT = 8
    MARKET_OI = 9

    def parse_rows(self, rows: RawTable, target_date: date) -> Optional[LargeTradersTxPosition]:
        tx_rows = [
            row
            for row in rows
            if len(row) > self.CONTRACT and row[self.CONTRACT] == self.CONTRACT_CODE
        ]

        fields: dict[str, int] = {}
        for key, index in self.ROWS.items():
            row = self.row(tx_rows, index, key)
            fields[f"{key}_long"] = self.integer(row, self.TOP_TEN_LONG, f"{key}_long")
            fields[f"{key}_short"] = self.integer(row, self.TOP_TEN_SHORT, f"{key}_short")

        all_months_row = self.row(tx_rows, self.ROWS["all_months"], "all_months")
        positions = LargeTraderPositions(
            **fields,
            all_months_market_oi=self.integer(
                all_months_row, self.MARKET_OI, "allMonthsTxfMarketOi"
            ),
        )
        return net_large_trader_positions(positions, target_date)
