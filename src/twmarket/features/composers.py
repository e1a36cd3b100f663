"""Derived metrics computed from already-extracted values.

Every composer is pure and returns None when any input is None: a
derived record is never built from partial data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from twmarket.core.errors import ParseError
from twmarket.core.logging import get_logger
from twmarket.models.records import (
    InstInvestorsMxfOi,
    LargeTradersTxPosition,
    MarginTransactions,
    MxfMarketOi,
    RetailMxPosition,
)

logger = get_logger(__name__)


def round_ratio(numerator: int, denominator: int, places: int = 4) -> float:
    """Divide exactly and round half away from zero.

    >>> round_ratio(12345, 100000)
    0.1235
    """
    if denominator == 0:
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    ratio = (Decimal(numerator) / Decimal(denominator)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(ratio)


# ============================================================================
# Retail position
# ============================================================================


def compose_retail_position(
    market: Optional[MxfMarketOi],
    institutional: Optional[InstInvestorsMxfOi],
) -> Optional[RetailMxPosition]:
    """Derive retail mini-TAIEX positioning.

    Retail holds whatever open interest the three institutional classes
    do not: long = market OI - institutional long, short = market OI -
    institutional short.

    Args:
        market: Total MXF open interest for the date
        institutional: Institutional MXF long/short open interest

    Returns:
        RetailMxPosition, or None if either input is absent
    """
    if market is None or institutional is None:
        return None

    market_oi = market.mxf_market_oi
    retail_long_oi = market_oi - institutional.inst_investors_mxf_long_oi
    retail_short_oi = market_oi - institutional.inst_investors_mxf_short_oi
    retail_net_oi = retail_long_oi - retail_short_oi
    ratio = round_ratio(retail_net_oi, market_oi)

    if market_oi == 0:
        logger.warning("MXF market open interest is zero", date=str(market.date))

    return RetailMxPosition(
        date=market.date,
        retail_mxf_long_oi=retail_long_oi,
        retail_mxf_short_oi=retail_short_oi,
        retail_mxf_net_oi=retail_net_oi,
        retail_mxf_long_short_ratio=ratio,
    )


# ============================================================================
# Margin balances
# ============================================================================


@dataclass(frozen=True)
class MarginLayout:
    """Offsets of current and prior balances in a flattened margin summary."""

    margin_balance: int
    margin_balance_prior: int
    short_balance: int
    short_balance_prior: int
    margin_balance_value: int
    margin_balance_value_prior: int


def compose_margin_transactions(
    values: Optional[Sequence[int | float]],
    layout: MarginLayout,
    target_date: date,
) -> Optional[MarginTransactions]:
    """Build margin balances and their day-over-day changes.

    Changes are deltas within the same payload (today's balance minus the
    prior-day balance printed beside it), not across fetches.

    Raises:
        ParseError: If an offset lies outside ``values`` or holds a fraction
    """
    if values is None:
        return None

    def at(index: int, field: str) -> int:
        if index >= len(values):
            raise ParseError(
                f"Offset {index} missing for {field} ({len(values)} values)",
                context={"field": field},
            )
        value = values[index]
        if isinstance(value, float) and not value.is_integer():
            raise ParseError(
                f"Expected an integer for {field}, got {value!r}",
                value=value,
                context={"field": field},
            )
        return int(value)

    margin_balance = at(layout.margin_balance, "marginBalance")
    short_balance = at(layout.short_balance, "shortBalance")
    margin_balance_value = at(layout.margin_balance_value, "marginBalanceValue")

    return MarginTransactions(
        date=target_date,
        margin_balance=margin_balance,
        margin_balance_change=margin_balance
        - at(layout.margin_balance_prior, "marginBalancePrior"),
        margin_balance_value=margin_balance_value,
        margin_balance_value_change=margin_balance_value
        - at(layout.margin_balance_value_prior, "marginBalanceValuePrior"),
        short_balance=short_balance,
        short_balance_change=short_balance - at(layout.short_balance_prior, "shortBalancePrior"),
    )


# ============================================================================
# Large traders
# ============================================================================


@dataclass(frozen=True)
class LargeTraderPositions:
    """Top-ten trader long/short open interest read from the report rows."""

    front_month_long: int
    front_month_short: int
    specific_front_month_long: int
    specific_front_month_short: int
    all_months_long: int
    all_months_short: int
    specific_all_months_long: int
    specific_all_months_short: int
    all_months_market_oi: int


def net_large_trader_positions(
    positions: Optional[LargeTraderPositions],
    target_date: date,
) -> Optional[LargeTradersTxPosition]:
    """Split top-ten trader net OI into specific/non-specific, front/back months.

    Each step reads only values computed before it:

        front_month_net          = long - short
        specific_front_month_net = long - short
        nonspecific_front_month  = front_month_net - specific_front_month_net
        all_months_net           = long - short
        specific_all_months_net  = long - short
        nonspecific_all_months   = all_months_net - specific_all_months_net
        specific_back_months     = specific_all_months_net - specific_front_month_net
        nonspecific_back_months  = nonspecific_all_months - nonspecific_front_month
    """
    if positions is None:
        return None

    front_month_net = positions.front_month_long - positions.front_month_short
    specific_front_month_net = (
        positions.specific_front_month_long - positions.specific_front_month_short
    )
    nonspecific_front_month_net = front_month_net - specific_front_month_net

    all_months_net = positions.all_months_long - positions.all_months_short
    specific_all_months_net = (
        positions.specific_all_months_long - positions.specific_all_months_short
    )
    nonspecific_all_months_net = all_months_net - specific_all_months_net

    specific_back_months_net = specific_all_months_net - specific_front_month_net
    nonspecific_back_months_net = nonspecific_all_months_net - nonspecific_front_month_net

    return LargeTradersTxPosition(
        date=target_date,
        top_ten_specific_front_month_net_oi=specific_front_month_net,
        top_ten_specific_back_months_txf_net_oi=specific_back_months_net,
        top_ten_nonspecific_front_month_txf_net_oi=nonspecific_front_month_net,
        top_ten_nonspecific_back_months_txf_net_oi=nonspecific_back_months_net,
        all_months_txf_market_oi=positions.all_months_market_oi,
    )
