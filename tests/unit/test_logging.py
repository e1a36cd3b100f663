"""Tests for structured logging setup."""

import pytest

from twmarket.core.logging import (
    add_trace_id,
    configure_logging,
    get_logger,
    get_trace_id,
    trace_scope,
)


class TestTraceScope:
    def test_opens_new_id_and_clears_it(self):
        assert get_trace_id() is None
        with trace_scope() as trace_id:
            assert trace_id
            assert get_trace_id() == trace_id
        assert get_trace_id() is None

    def test_nested_scope_reuses_outer_id(self):
        with trace_scope() as outer:
            with trace_scope() as inner:
                assert inner == outer
            assert get_trace_id() == outer

    def test_separate_scopes_get_distinct_ids(self):
        with trace_scope() as first:
            pass
        with trace_scope() as second:
            pass
        assert first != second

    def test_processor_adds_trace_id(self):
        with trace_scope() as trace_id:
            event = add_trace_id(None, "info", {"event": "Fetching report"})
        assert event["trace_id"] == trace_id

    def test_processor_keeps_bound_trace_id(self):
        with trace_scope():
            event = add_trace_id(None, "info", {"event": "x", "trace_id": "bound"})
        assert event["trace_id"] == "bound"

    def test_processor_without_trace_id(self):
        event = add_trace_id(None, "info", {"event": "Fetching report"})
        assert "trace_id" not in event


class TestConfigureLogging:
    def test_invalid_level_raises(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")

    def test_invalid_format_raises(self):
        with pytest.raises(ValueError):
            configure_logging("INFO", "xml")

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_configures_and_logs(self, log_format):
        configure_logging("debug", log_format)
        get_logger("twmarket.test").info("Report fetched", report="market_trades")
