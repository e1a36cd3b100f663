"""Locale-tolerant numeral parsing for provider cells."""

from __future__ import annotations

import re
from typing import Any

from twmarket.core.errors import ParseError

_NUMERAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_number(text: Any) -> int | float:
    """Parse a numeral such as ``"1,234"``, ``"(1,234)"`` or ``"-36.09"``.

    Thousands separators and surrounding whitespace are ignored and a
    parenthesized value is negative. Integral text yields ``int`` so that
    derived arithmetic stays exact.

    Raises:
        ParseError: If the text is empty or not a plain numeral
    """
    if isinstance(text, bool):
        raise ParseError(f"Not a number: {text!r}", value=text)
    if isinstance(text, (int, float)):
        return text
    if text is None:
        raise ParseError("Not a number: empty cell", value=text)

    cleaned = str(text).strip().replace(",", "")
    negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        cleaned = cleaned[1:-1].strip()

    if not _NUMERAL_RE.match(cleaned):
        raise ParseError(f"Not a number: {text!r}", value=text)

    value: int | float = float(cleaned) if "." in cleaned else int(cleaned)
    return -value if negative else value


def is_numeral(text: Any) -> bool:
    """Return True if ``parse_number`` would accept the value."""
    try:
        parse_number(text)
    except ParseError:
        return False
    return True
