"""Base classes for report extractors.

An extractor takes an already-decoded payload (a RawTable or a JSON
object) plus the requested date and returns exactly one normalized record,
or ``None`` when the provider has nothing published for that date.

Positional knowledge lives in class-level layout constants on each
subclass, so a layout drift is fixed by editing one table.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Generic, Optional, Sequence, TypeVar

from twmarket.core.errors import ParseError, TwMarketError
from twmarket.core.logging import get_logger
from twmarket.models.records import Record
from twmarket.parsers.decoding import RawRow, RawTable, cell, parse_json_envelope
from twmarket.utils.numerals import parse_number

TRecord = TypeVar("TRecord", bound=Record)


class ReportParser(ABC, Generic[TRecord]):
    """Base class for all report extractors.

    Attributes:
        PROVIDER: Provider name (twse, tpex, taifex)
        REPORT: Report identity used in logs, metrics and error context
        SCHEMA_VERSION: Version of the layout this extractor reads
    """

    PROVIDER: str = ""
    REPORT: str = ""
    SCHEMA_VERSION: str = "v1.0"

    def __init__(self) -> None:
        self.logger = get_logger(__name__).bind(
            provider=self.PROVIDER, report=self.REPORT, schema_version=self.SCHEMA_VERSION
        )

    @abstractmethod
    def parse(self, payload: Any, target_date: date) -> Optional[TRecord]:
        """Extract a record for ``target_date`` from a decoded payload.

        Returns:
            The record, or None if the payload holds no data for the date

        Raises:
            ParseError: If a cell at a known offset is missing or not numeric
        """

    def extract(self, payload: Any, target_date: date) -> Optional[TRecord]:
        """Run ``parse`` and attach report context to any failure."""
        try:
            return self.parse(payload, target_date)
        except TwMarketError as e:
            raise e.with_context(
                provider=self.PROVIDER,
                report=self.REPORT,
                date=target_date.isoformat(),
                schema_version=self.SCHEMA_VERSION,
            )

    def absent(self, reason: str, **details: Any) -> None:
        """Log why a payload yields no record and return None."""
        self.logger.debug("No data for requested date", reason=reason, **details)
        return None

    def text(self, row: Sequence[Any], index: int, field: str) -> str:
        """Return the non-empty cell at ``index`` of ``row``."""
        value = cell(row, index)
        if value is None or str(value).strip() == "":
            raise ParseError(
                f"Column {index} missing for {field} (row has {len(row)} cells)",
                value=value,
                context={"field": field, "column": index},
            )
        return str(value)

    def number(self, row: Sequence[Any], index: int, field: str) -> int | float:
        """Parse the numeric cell at ``index`` of ``row``."""
        if index >= len(row):
            raise ParseError(
                f"Column {index} missing for {field} (row has {len(row)} cells)",
                context={"field": field},
            )
        try:
            return parse_number(row[index])
        except ParseError as e:
            raise e.with_context(field=field, column=index)

    def integer(self, row: Sequence[Any], index: int, field: str) -> int:
        """Parse a cell that must hold a whole number."""
        value = self.number(row, index, field)
        if isinstance(value, float):
            if not value.is_integer():
                raise ParseError(
                    f"Expected an integer for {field}, got {row[index]!r}",
                    value=row[index],
                    context={"field": field, "column": index},
                )
            value = int(value)
        return value


class TabularReportParser(ReportParser[TRecord]):
    """Extractor for CSV downloads whose first row is a header marker.

    The header row's first cell must equal ``HEADER_MARKER``; anything else
    (another caption, an empty table, an error page tokenized as CSV) means
    no data was published.
    """

    HEADER_MARKER: str = "日期"

    def parse(self, payload: RawTable, target_date: date) -> Optional[TRecord]:
        if not payload:
            return self.absent("empty table")
        marker = cell(payload[0], 0)
        if marker != self.HEADER_MARKER:
            return self.absent("header marker mismatch", marker=marker)
        return self.parse_rows(payload[1:], target_date)

    @abstractmethod
    def parse_rows(self, rows: RawTable, target_date: date) -> Optional[TRecord]:
        """Extract from the data rows that follow the header marker."""

    def row(self, rows: RawTable, index: int, label: str) -> RawRow:
        """Return the data row at a fixed offset."""
        if index >= len(rows):
            raise ParseError(
                f"Row {index} ({label}) missing: table has {len(rows)} data rows",
                context={"row": label},
            )
        return rows[index]


class EnvelopeReportParser(ReportParser[TRecord]):
    """Extractor for JSON reports gated by a status flag or a record count."""

    STATUS_FIELD: Optional[str] = None
    OK_STATUS: str = "ok"
    COUNT_FIELD: Optional[str] = None

    def parse(self, payload: Any, target_date: date) -> Optional[TRecord]:
        data = parse_json_envelope(
            payload,
            status_field=self.STATUS_FIELD,
            ok_status=self.OK_STATUS,
            count_field=self.COUNT_FIELD,
        )
        if data is None:
            return self.absent("envelope not affirmative")
        return self.parse_data(data, target_date)

    @abstractmethod
    def parse_data(self, data: dict[str, Any], target_date: date) -> Optional[TRecord]:
        """Extract from an affirmed envelope."""

    def section(self, data: dict[str, Any], key: str) -> Any:
        """Return a required envelope member."""
        if key not in data or data[key] is None:
            raise ParseError(f"Envelope member {key!r} missing", context={"member": key})
        return data[key]

    def flatten_values(self, rows: Sequence[Sequence[Any]]) -> list[int | float]:
        """Drop each row's leading label cell and parse the rest, flattened."""
        values: list[int | float] = []
        for row_index, row in enumerate(rows):
            for col_index in range(1, len(row)):
                try:
                    values.append(parse_number(row[col_index]))
                except ParseError as e:
                    raise e.with_context(row=row_index, column=col_index)
        return values

    def value_at(self, values: Sequence[int | float], index: int, field: str) -> int | float:
        """Return a flattened value by offset."""
        if index >= len(values):
            raise ParseError(
                f"Offset {index} missing for {field} ({len(values)} values)",
                context={"field": field},
            )
        return values[index]
