"""Tests for field validators."""

from datetime import date, datetime, timezone

import pytest

from talent_directory.validators import (
    is_integer,
    is_truthy,
    is_valid_date,
    is_valid_email,
    matches_enum,
    parse_date,
    parse_datetime,
)


class TestValidators:
    """Test cases for the validator predicates."""

    @pytest.mark.parametrize(
        "value", ["jane@example.com", "first.last+tag@sub.example.co", " jane@example.com "]
    )
    def test_valid_emails(self, value):
        assert is_valid_email(value) is True

    @pytest.mark.parametrize("value", ["not-an-email", "jane@", "@example.com", "jane@example", ""])
    def test_invalid_emails(self, value):
        assert is_valid_email(value) is False

    @pytest.mark.parametrize(
        "value", ["2025-01-15", "2025-01-15T10:00:00Z", "2025-01-15 10:00:00", "2024-02-29"]
    )
    def test_valid_dates(self, value):
        assert is_valid_date(value) is True

    @pytest.mark.parametrize("value", ["2025-02-30", "15/01/2025", "yesterday", "", "2025-13-01"])
    def test_invalid_dates(self, value):
        assert is_valid_date(value) is False

    @pytest.mark.parametrize("value", ["85", "0", "-3", "+7", " 42 "])
    def test_integers(self, value):
        assert is_integer(value) is True

    @pytest.mark.parametrize("value", ["85.5", "1e3", "abc", "", "inf", "NaN"])
    def test_non_integers(self, value):
        assert is_integer(value) is False

    def test_matches_enum_is_case_insensitive(self):
        allowed = ["beginner", "intermediate", "advanced"]

        assert matches_enum("Advanced", allowed) is True
        assert matches_enum("INTERMEDIATE", allowed) is True
        assert matches_enum("expert", allowed) is False
        assert matches_enum("", allowed) is False

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "True"])
    def test_truthy_flags(self, value):
        assert is_truthy(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "yes", "", None])
    def test_falsy_flags(self, value):
        assert is_truthy(value) is False


class TestParsers:
    """Test cases for date parsing helpers."""

    def test_parse_date(self):
        assert parse_date("2025-01-15") == date(2025, 1, 15)
        assert parse_date("2025-01-15T10:00:00Z") == date(2025, 1, 15)

    def test_parse_datetime_with_utc_suffix(self):
        assert parse_datetime("2025-01-15T10:00:00Z") == datetime(
            2025, 1, 15, 10, 0, tzinfo=timezone.utc
        )

    def test_parse_datetime_rejects_blank(self):
        with pytest.raises(ValueError):
            parse_datetime("  ")
