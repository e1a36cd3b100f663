"""Shared helpers: calendar conversion, numeral parsing, metrics."""
