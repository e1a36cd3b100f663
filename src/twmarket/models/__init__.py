"""Normalized record types."""

from .records import (
    DailyRecord,
    InstInvestorsMxfOi,
    InstInvestorsTrades,
    InstInvestorsTxfTrades,
    InstInvestorsTxoTrades,
    LargeTradersTxPosition,
    ListedInstrument,
    MarginTransactions,
    MarketBreadth,
    MarketTrades,
    MxfMarketOi,
    Record,
    RetailMxPosition,
)

__all__ = [
    "Record",
    "DailyRecord",
    "ListedInstrument",
    "MarketTrades",
    "MarketBreadth",
    "InstInvestorsTrades",
    "MarginTransactions",
    "InstInvestorsTxfTrades",
    "InstInvestorsTxoTrades",
    "MxfMarketOi",
    "InstInvestorsMxfOi",
    "RetailMxPosition",
    "LargeTradersTxPosition",
]
