"""Tests for the error hierarchy."""

import pytest

from twmarket.core.errors import (
    ConfigError,
    DecodeError,
    ParseError,
    TransportError,
    TwMarketError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            DecodeError("bad bytes"),
            ParseError("bad cell"),
            TransportError("taifex", "timed out"),
            ConfigError("bad setting"),
        ],
    )
    def test_all_errors_share_base(self, error):
        assert isinstance(error, TwMarketError)

    def test_codes(self):
        assert DecodeError("x").code == "DECODE_ERROR"
        assert ParseError("x").code == "PARSE_ERROR"
        assert TransportError("twse", "x").code == "TRANSPORT_ERROR"
        assert ConfigError("x").code == "CONFIG_ERROR"

    def test_only_transport_is_retryable(self):
        assert TransportError("twse", "x").retryable is True
        assert ParseError("x").retryable is False
        assert DecodeError("x").retryable is False


class TestTransportError:
    def test_message_names_service(self):
        error = TransportError("tpex", "HTTP 503", status_code=503)
        assert error.message == "tpex: HTTP 503"
        assert error.service == "tpex"
        assert error.status_code == 503


class TestParseError:
    def test_keeps_offending_value(self):
        assert ParseError("not a number", value="N/A").value == "N/A"


class TestContext:
    """Tests for attaching location details to errors."""

    def test_with_context_returns_same_error(self):
        error = ParseError("bad cell")
        assert error.with_context(report="market_trades") is error
        assert error.context == {"report": "market_trades"}

    def test_with_context_keeps_inner_details(self):
        error = ParseError("bad cell", context={"field": "price"})
        error.with_context(field="outer", provider="twse")

        assert error.context == {"field": "price", "provider": "twse"}

    def test_str_includes_code_context_and_hint(self):
        error = ParseError("bad cell", recovery_hint="check offsets", context={"column": 3})
        assert str(error) == "[PARSE_ERROR] bad cell <column=3> (check offsets)"

    def test_context_is_copied(self):
        shared = {"field": "price"}
        error = ParseError("bad cell", context=shared)
        error.with_context(provider="twse")
        assert shared == {"field": "price"}
