"""
tests/test_formatting.py
─────────────────────────
Tests for fixed-locale display formatting.
"""
from src.analytics.formatting import (
    format_day_label,
    format_day_month,
    format_inr,
    format_inr_k,
    group_indian,
    share_pct,
)


class TestIndianGrouping:
    def test_small_numbers(self):
        assert group_indian(0) == "0"
        assert group_indian(999) == "999"

    def test_lakh_and_crore(self):
        assert group_indian(1000) == "1,000"
        assert group_indian(123456) == "1,23,456"
        assert group_indian(12345678) == "1,23,45,678"

    def test_negative(self):
        assert group_indian(-123456) == "-1,23,456"


class TestCurrency:
    def test_no_decimals(self):
        assert format_inr(200000.4) == "₹ 2,00,000"

    def test_unspaced(self):
        assert format_inr(1500, spaced=False) == "₹1,500"

    def test_thousands_tick(self):
        assert format_inr_k(12000) == "12K"

    def test_half_rounds_away_from_zero(self):
        assert format_inr(1234.5) == "₹ 1,235"
        assert format_inr(-1234.5) == "₹ -1,235"
        assert format_inr_k(2500) == "3K"

    def test_share(self):
        assert share_pct(50.0, 200.0) == 25.0
        assert share_pct(50.0, 0.0) == 0.0


class TestDateLabels:
    def test_day_label(self):
        assert format_day_label("2024-07-30") == "30 Jul 24"

    def test_day_month(self):
        assert format_day_month("2024-07-30T00:00:00") == "30<br>Jul"

    def test_non_date_passthrough(self):
        assert format_day_label("week 31") == "week 31"
