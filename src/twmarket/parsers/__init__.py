"""Decoders and per-report field extractors."""

from .base_parser import EnvelopeReportParser, ReportParser, TabularReportParser
from .decoding import (
    RawRow,
    RawTable,
    decode,
    parse_html_table,
    parse_json,
    parse_json_envelope,
    parse_tabular,
)

__all__ = [
    "ReportParser",
    "TabularReportParser",
    "EnvelopeReportParser",
    "RawRow",
    "RawTable",
    "decode",
    "parse_tabular",
    "parse_json",
    "parse_json_envelope",
    "parse_html_table",
]
