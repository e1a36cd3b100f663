"""Derived-metric composers."""

from .composers import (
    LargeTraderPositions,
    MarginLayout,
    compose_margin_transactions,
    compose_retail_position,
    net_large_trader_positions,
    round_ratio,
)

__all__ = [
    "LargeTraderPositions",
    "MarginLayout",
    "compose_margin_transactions",
    "compose_retail_position",
    "net_large_trader_positions",
    "round_ratio",
]
