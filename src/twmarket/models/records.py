"""Normalized daily records.

Attributes are snake_case; serialized keys are camelCase
(``record.model_dump(by_alias=True, mode="json")``), with ``date``
rendered as ``YYYY-MM-DD``. Records are frozen once built.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base for every normalized record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys and an ISO date."""
        return self.model_dump(by_alias=True, mode="json")


class DailyRecord(Record):
    date: Date


class ListedInstrument(Record):
    symbol: str
    name: str
    market: str
    industry: str


class MarketTrades(DailyRecord):
    trade_volume: int | float
    trade_value: int | float
    transaction: int | float
    price: float
    change: float


class MarketBreadth(DailyRecord):
    up: int
    limit_up: int
    down: int
    limit_down: int
    unchanged: int
    unmatched: int


class InstInvestorsTrades(DailyRecord):
    fini_net_buy_sell: int | float
    sitc_net_buy_sell: int | float
    dealers_net_buy_sell: int | float


class MarginTransactions(DailyRecord):
    margin_balance: int
    margin_balance_change: int
    margin_balance_value: int
    margin_balance_value_change: int
    short_balance: int
    short_balance_change: int


class InstInvestorsTxfTrades(DailyRecord):
    fini_txf_net_oi: int
    sitc_tx_net_oi: int
    dealers_txf_net_oi: int


class InstInvestorsTxoTrades(DailyRecord):
    fini_txo_calls_net_oi: int
    fini_txo_calls_net_oi_value: int | float
    sitc_txo_calls_net_oi: int
    sitc_txo_calls_net_oi_value: int | float
    dealers_txo_calls_net_oi: int
    dealers_txo_calls_net_oi_value: int | float
    fini_txo_puts_net_oi: int
    fini_txo_puts_net_oi_value: int | float
    sitc_txo_puts_net_oi: int
    sitc_txo_puts_net_oi_value: int | float
    dealers_txo_puts_net_oi: int
    dealers_txo_puts_net_oi_value: int | float


class MxfMarketOi(DailyRecord):
    """Mini-TAIEX futures open interest summed over regular-session months."""

    mxf_market_oi: int


class InstInvestorsMxfOi(DailyRecord):
    """Mini-TAIEX futures long/short OI summed over the three institutional classes."""

    inst_investors_mxf_long_oi: int
    inst_investors_mxf_short_oi: int


class RetailMxPosition(DailyRecord):
    retail_mxf_long_oi: int
    retail_mxf_short_oi: int
    retail_mxf_net_oi: int
    retail_mxf_long_short_ratio: float


class LargeTradersTxPosition(DailyRecord):
    top_ten_specific_front_month_net_oi: int
    top_ten_specific_back_months_txf_net_oi: int
    top_ten_nonspecific_front_month_txf_net_oi: int
    top_ten_nonspecific_back_months_txf_net_oi: int
    all_months_txf_market_oi: int
