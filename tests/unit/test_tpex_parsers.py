"""Tests for TPEx report extractors."""

from datetime import date

import pytest

from tests.fixtures.sample_payloads import (
    tpex_inst_investors_payload,
    tpex_margin_payload,
    tpex_market_breadth_payload,
    tpex_market_trades_payload,
)
from twmarket.core.errors import ParseError
from twmarket.parsers.tpex import (
    TpexInstInvestorsTradesParser,
    TpexMarginTransactionsParser,
    TpexMarketBreadthParser,
    TpexMarketTradesParser,
)

TARGET = date(2024, 1, 2)


class TestMarketTrades:
    def test_row_for_requested_date(self):
        record = TpexMarketTradesParser().extract(tpex_market_trades_payload(), TARGET)

        assert record.trade_volume == 500000
        assert record.trade_value == 30000000
        assert record.transaction == 250000
        assert record.price == 232.41
        assert record.change == -1.23

    def test_zero_records_is_absent(self):
        assert TpexMarketTradesParser().extract(tpex_market_trades_payload(total=0), TARGET) is None

    def test_date_not_listed_is_absent(self):
        payload = tpex_market_trades_payload()
        assert TpexMarketTradesParser().extract(payload, date(2024, 1, 5)) is None

    def test_missing_rows_member_raises(self):
        payload = tpex_market_trades_payload()
        del payload["aaData"]

        with pytest.raises(ParseError) as exc_info:
            TpexMarketTradesParser().extract(payload, TARGET)
        assert exc_info.value.context["provider"] == "tpex"


class TestMarketBreadth:
    def test_named_counts(self):
        record = TpexMarketBreadthParser().extract(tpex_market_breadth_payload(), TARGET)

        assert record.to_dict() == {
            "date": "2024-01-02",
            "up": 300,
            "limitUp": 12,
            "down": 450,
            "limitDown": 4,
            "unchanged": 90,
            "unmatched": 25,
        }

    def test_zero_records_is_absent(self):
        assert TpexMarketBreadthParser().extract(tpex_market_breadth_payload(total=0), TARGET) is None

    def test_missing_member_raises(self):
        payload = tpex_market_breadth_payload()
        del payload["downStopNum"]

        with pytest.raises(ParseError):
            TpexMarketBreadthParser().extract(payload, TARGET)

    def test_fractional_count_raises(self):
        payload = tpex_market_breadth_payload()
        payload["upNum"] = "300.5"

        with pytest.raises(ParseError) as exc_info:
            TpexMarketBreadthParser().extract(payload, TARGET)

        assert exc_info.value.context["field"] == "upNum"


class TestInstInvestorsTrades:
    def test_offsets_into_flattened_values(self):
        record = TpexInstInvestorsTradesParser().extract(tpex_inst_investors_payload(), TARGET)

        assert record.fini_net_buy_sell == 1000
        assert record.sitc_net_buy_sell == -300
        assert record.dealers_net_buy_sell == 120

    def test_zero_records_is_absent(self):
        payload = tpex_inst_investors_payload(total=0)
        assert TpexInstInvestorsTradesParser().extract(payload, TARGET) is None


class TestMarginTransactions:
    def test_footer_labels_and_blanks_are_dropped(self):
        record = TpexMarginTransactionsParser().extract(tpex_margin_payload(), TARGET)

        assert record.margin_balance == 1000500
        assert record.margin_balance_change == 500
        assert record.short_balance == 49400
        assert record.short_balance_change == -600
        assert record.margin_balance_value == 40080000
        assert record.margin_balance_value_change == 80000

    def test_labels_holding_digits_are_dropped(self):
        payload = tpex_margin_payload()
        payload["tfootData_one"][0] = "合計(113年)"
        payload["tfootData_two"][1] = "-"

        record = TpexMarginTransactionsParser().extract(payload, TARGET)

        assert record.margin_balance == 1000500
        assert record.margin_balance_value == 40080000

    def test_short_footer_raises(self):
        payload = tpex_margin_payload()
        payload["tfootData_two"] = ["融資金額(仟元)", "", "40,000,000"]

        with pytest.raises(ParseError):
            TpexMarginTransactionsParser().extract(payload, TARGET)

    def test_zero_records_is_absent(self):
        assert TpexMarginTransactionsParser().extract(tpex_margin_payload(total=0), TARGET) is None
