"""Tests for date parsing utilities."""

import pytest
from datetime import date

from bankrec.utils.date_parser import parse_brazilian_date, parse_ofx_date


class TestParseBrazilianDate:
    """Tests for parse_brazilian_date."""

    def test_day_first_slash(self):
        assert parse_brazilian_date("05/03/2026") == date(2026, 3, 5)

    def test_day_first_dash_two_digit_year(self):
        assert parse_brazilian_date("05-03-26") == date(2026, 3, 5)

    def test_day_first_dot(self):
        assert parse_brazilian_date("31.12.2025") == date(2025, 12, 31)

    def test_with_time_suffix(self):
        assert parse_brazilian_date("05/03/2026 14:30") == date(2026, 3, 5)

    def test_iso_fallback(self):
        assert parse_brazilian_date("2026-03-05") == date(2026, 3, 5)

    def test_iso_datetime_fallback(self):
        assert parse_brazilian_date("2026-03-05T10:00:00") == date(2026, 3, 5)

    def test_whitespace_stripped(self):
        assert parse_brazilian_date("  01/01/2026 ") == date(2026, 1, 1)

    @pytest.mark.parametrize("value", ["", "bad-row", "32/01/2026", "Saldo anterior"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_brazilian_date(value)


class TestParseOfxDate:
    """Tests for parse_ofx_date."""

    def test_date_only(self):
        assert parse_ofx_date("20260110") == date(2026, 1, 10)

    def test_with_time_and_zone(self):
        assert parse_ofx_date("20260105120000[-3:BRT]") == date(2026, 1, 5)

    @pytest.mark.parametrize("value", ["2026011", "2026AB10", "20261301"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_ofx_date(value)
