"""Tests for proplead.parsing."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from proplead.parsing import (
    clean_numeric_string,
    parse_budget,
    parse_float,
    parse_int,
    parse_timestamp,
)


class TestCleanNumericString:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("₹50,00,000", "5000000"),
            ("$1,234.56", "1234.56"),
            ("abc", ""),
            ("-42.5", "-42.5"),
            ("", ""),
        ],
    )
    def test_cases(self, raw, expected):
        assert clean_numeric_string(raw) == expected


class TestParseBudget:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (5_000_000, 5_000_000.0),
            (7.5e6, 7_500_000.0),
            ("₹50,00,000", 5_000_000.0),
            ("Rs. 45,00,000", 4_500_000.0),
            ("75L", 7_500_000.0),
            ("75 lakh", 7_500_000.0),
            ("1.2 Cr", 12_000_000.0),
            ("2 crore", 20_000_000.0),
            ("850k", 850_000.0),
        ],
    )
    def test_parses(self, value, expected):
        assert parse_budget(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, True, False, "", "   ", "negotiable", [], {}])
    def test_unparseable(self, value):
        assert parse_budget(value) is None


class TestParseInt:
    @pytest.mark.parametrize(
        "value, expected",
        [(3, 3), (3.9, 3), ("12", 12), (" 7 ", 7), ("4.0", 4)],
    )
    def test_parses(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", [None, True, "", "many", float("inf"), float("nan"), "9" * 400])
    def test_unparseable(self, value):
        assert parse_int(value) is None


class TestParseFloat:
    def test_keeps_sign(self):
        assert parse_float("-12.5") == -12.5

    def test_rejects_junk(self):
        assert parse_float("fast") is None

    def test_bool(self):
        assert parse_float(True) is None


class TestParseTimestamp:
    def test_aware_datetime_unchanged(self):
        moment = datetime(2026, 10, 1, 9, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        assert parse_timestamp(moment) is moment

    def test_naive_datetime_becomes_utc(self):
        assert parse_timestamp(datetime(2026, 10, 1, 9, 0)) == datetime(
            2026, 10, 1, 9, 0, tzinfo=timezone.utc
        )

    def test_date(self):
        assert parse_timestamp(date(2026, 10, 1)) == datetime(2026, 10, 1, tzinfo=timezone.utc)

    def test_iso_with_z(self):
        assert parse_timestamp("2026-10-01T09:00:00Z") == datetime(
            2026, 10, 1, 9, 0, tzinfo=timezone.utc
        )

    def test_iso_with_offset(self):
        parsed = parse_timestamp("2026-10-01T14:30:00+05:30")
        assert parsed == datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)

    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_store_timestamp_mapping(self):
        parsed = parse_timestamp({"seconds": 86_400, "nanoseconds": 500_000_000})
        assert parsed == datetime(1970, 1, 2, 0, 0, 0, 500_000, tzinfo=timezone.utc)

    def test_underscored_store_timestamp(self):
        assert parse_timestamp({"_seconds": 60, "_nanoseconds": 0}) == datetime(
            1970, 1, 1, 0, 1, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("value", [None, True, "", "yesterday", {"nanos": 1}, [1]])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize(
        "value",
        [
            1_700_000_000_000,
            float("inf"),
            float("nan"),
            {"seconds": 1_700_000_000_000},
            {"seconds": 60, "nanoseconds": "500"},
        ],
    )
    def test_out_of_range_or_malformed_epoch(self, value):
        assert parse_timestamp(value) is None
