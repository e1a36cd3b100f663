"""Decoder and format adapters.

These helpers turn raw payloads into positional structures and know
nothing about what the cells mean:

- ``decode``: bytes in a legacy codec (Big5/cp950) to text
- ``parse_tabular``: CSV text to a RawTable (list of rows of cells)
- ``parse_json_envelope``: provider JSON gated by a status or count field
- ``parse_html_table``: rows of cell text from an HTML table
"""

from __future__ import annotations

import json
from io import StringIO
from typing import Any, Optional, Sequence, Union

import polars as pl
from bs4 import BeautifulSoup

from twmarket.core.errors import DecodeError
from twmarket.core.logging import get_logger

logger = get_logger(__name__)

RawRow = list[Optional[str]]
RawTable = list[RawRow]


def decode(payload: bytes, encoding: str) -> str:
    """Decode a byte payload, failing loudly on invalid sequences.

    Raises:
        DecodeError: If the bytes are not valid for ``encoding``
    """
    try:
        return payload.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise DecodeError(f"Cannot decode payload as {encoding}: {e}") from e


def parse_tabular(
    text: str,
    has_header: bool = False,
    as_rows: bool = True,
) -> Union[RawTable, list[dict[str, Optional[str]]]]:
    """Parse CSV text into rows of raw string cells.

    Args:
        text: Decoded CSV text
        has_header: Treat the first line as column names. The TAIFEX
            downloads are read with ``has_header=False`` so the header line
            stays in the table as its marker row.
        as_rows: Yield positional lists; otherwise dicts keyed by column name

    Returns:
        RawTable (or keyed rows). Empty text yields an empty table. Empty
        cells come back as ``None``. Without a header every row is as wide
        as the widest line, so no cell past the first line's width is lost.

    Raises:
        DecodeError: If the text is not tokenizable CSV, or a row is wider
            than the header line when ``has_header`` is set
    """
    if not text or not text.strip():
        return []

    source = text.lstrip("\ufeff")
    options: dict[str, Any] = {"has_header": has_header}
    if has_header:
        options["infer_schema"] = False
    else:
        # Quoted separators can only overestimate the width
        width = max(line.count(",") for line in source.splitlines()) + 1
        options["schema"] = {f"column_{i}": pl.String for i in range(1, width + 1)}

    try:
        df = pl.read_csv(StringIO(source), **options)
    except pl.exceptions.NoDataError:
        return []
    except pl.exceptions.PolarsError as e:
        raise DecodeError(f"Unreadable tabular payload: {e}") from e

    # Provider CSVs pad cells with spaces
    df = df.with_columns(pl.all().str.strip_chars())
    if not has_header:
        df = _drop_empty_trailing_columns(df)

    if as_rows:
        return [list(row) for row in df.rows()]
    return df.rows(named=True)


def _drop_empty_trailing_columns(df: pl.DataFrame) -> pl.DataFrame:
    while df.width > 1 and df.get_column(df.columns[-1]).null_count() == df.height:
        df = df.drop(df.columns[-1])
    return df


def parse_json(payload: Union[bytes, str]) -> Any:
    """Parse a JSON body.

    Raises:
        DecodeError: If the body is not JSON
    """
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Response is not JSON: {e}") from e


def parse_json_envelope(
    payload: Any,
    status_field: Optional[str] = None,
    ok_status: str = "ok",
    count_field: Optional[str] = None,
) -> Optional[dict[str, Any]]:
    """Return the payload when the provider affirms it has data, else None.

    Exactly one gate is used: ``status_field`` must equal ``ok_status``
    (case-insensitive), or ``count_field`` must be a positive count.
    A non-affirmative envelope is absence, never an exception.

    Raises:
        DecodeError: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object, got {type(payload).__name__}")

    if status_field is not None:
        status = payload.get(status_field)
        if not isinstance(status, str) or status.strip().lower() != ok_status.lower():
            logger.debug("Envelope status not affirmative", status=status)
            return None
        return payload

    if count_field is not None:
        count = payload.get(count_field)
        try:
            affirmative = int(count) > 0
        except (TypeError, ValueError):
            affirmative = False
        if not affirmative:
            logger.debug("Envelope record count not positive", count=count)
            return None
        return payload

    raise ValueError("parse_json_envelope needs status_field or count_field")


def parse_html_table(html: str, selector: str, skip_rows: int = 0) -> RawTable:
    """Extract the stripped cell text of every row matching ``selector``.

    Args:
        html: Decoded HTML page
        selector: CSS selector for the table rows (e.g. ``"table.h4 tr"``)
        skip_rows: Leading rows to drop (header rows)
    """
    soup = BeautifulSoup(html, "html.parser")

    rows: RawTable = []
    for tr in soup.select(selector)[skip_rows:]:
        rows.append([td.get_text(strip=True) for td in tr.find_all("td")])
    return rows


def cell(row: Sequence[Optional[str]], index: int) -> Optional[str]:
    """Return a cell by offset, or None if the row is too short."""
    return row[index] if 0 <= index < len(row) else None
