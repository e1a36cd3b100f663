"""Conversion between ISO dates and the ROC (Minguo) calendar.

TWSE and TPEx publish dates as ``yyy/MM/dd`` where the year is the
Gregorian year minus 1911. TAIFEX uses Gregorian ``yyyy/MM/dd``.
"""

from __future__ import annotations

from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from twmarket.core.errors import ParseError

ROC_EPOCH_OFFSET = 1911


def to_roc_date(target_date: date) -> tuple[int, int, int]:
    """Split a date into (ROC year, month, day)."""
    return target_date.year - ROC_EPOCH_OFFSET, target_date.month, target_date.day


def from_roc_date(roc_year: int, month: int, day: int) -> date:
    """Build a Gregorian date from ROC year, month and day.

    Raises:
        ParseError: If the components do not form a valid calendar date
    """
    try:
        return date(roc_year + ROC_EPOCH_OFFSET, month, day)
    except ValueError as e:
        raise ParseError(
            f"Invalid ROC date components {roc_year}/{month}/{day}",
            value=(roc_year, month, day),
        ) from e


def format_roc_date(target_date: date, sep: str = "/") -> str:
    """Render a date the way TPEx query strings expect (``113/01/02``)."""
    roc_year, month, day = to_roc_date(target_date)
    return f"{roc_year}{sep}{month:02d}{sep}{day:02d}"


def parse_roc_date(text: str) -> date:
    """Parse a provider ROC date cell such as ``113/01/02``.

    Raises:
        ParseError: If the text is not a ``yyy/MM/dd`` ROC date
    """
    parts = str(text).strip().split("/")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ParseError(f"Not a ROC date: {text!r}", value=text)
    roc_year, month, day = (int(p) for p in parts)
    return from_roc_date(roc_year, month, day)


def years_before(target_date: date, years: int) -> date:
    """Subtract whole years; Feb 29 lands on Feb 28 in a non-leap year."""
    return target_date - relativedelta(years=years)


def resolve_target_date(target_date: date | str | None = None) -> date:
    """Normalize an optional date argument, defaulting to today.

    Accepts a ``date``, an ISO ``YYYY-MM-DD`` string or ``None``.
    """
    if target_date is None:
        return date.today()
    if isinstance(target_date, datetime):
        return target_date.date()
    if isinstance(target_date, date):
        return target_date
    try:
        return date.fromisoformat(target_date)
    except ValueError as e:
        raise ParseError(f"Not an ISO date: {target_date!r}", value=target_date) from e
