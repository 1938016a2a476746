"""Tests for input validation helpers."""

from datetime import datetime, timezone

import pytest

from teamtasks.core.exceptions import ValidationError
from teamtasks.core.validation import (
    parse_date_value,
    require_email_shape,
    require_enum,
    require_future_or_absent_date,
    require_length,
    require_non_empty,
    require_parseable_date,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class TestRequireNonEmpty:
    @pytest.mark.parametrize("value", [None, "", "   ", 5])
    def test_rejects(self, value):
        with pytest.raises(ValidationError, match="Team name is required and cannot be empty"):
            require_non_empty(value, "Team name")

    def test_accepts(self):
        assert require_non_empty(" x ", "Team name") == " x "


class TestRequireLength:
    def test_returns_trimmed(self):
        assert require_length("  Alpha  ", "Team name", 1, 100) == "Alpha"

    def test_upper_bound_inclusive(self):
        assert require_length("a" * 100, "Team name", 1, 100) == "a" * 100

    def test_too_long(self):
        with pytest.raises(ValidationError, match="between 1 and 100 characters"):
            require_length("a" * 101, "Team name", 1, 100)

    def test_length_measured_after_trim(self):
        assert require_length(" " + "a" * 100 + " ", "Team name", 1, 100) == "a" * 100


class TestRequireEmailShape:
    @pytest.mark.parametrize("value", ["bob@example.com", "a.b+c@sub.example.org"])
    def test_accepts(self, value):
        assert require_email_shape(value) == value

    @pytest.mark.parametrize("value", ["bob", "bob@", "bob@example", "bo b@example.com", "@example.com"])
    def test_rejects(self, value):
        with pytest.raises(ValidationError, match="Invalid email format"):
            require_email_shape(value)


class TestRequireEnum:
    def test_none_passes(self):
        assert require_enum(None, ["Low", "High"], "priority") is None

    def test_member_passes(self):
        assert require_enum("Low", ["Low", "High"], "priority") == "Low"

    def test_is_case_sensitive(self):
        with pytest.raises(ValidationError, match="Invalid priority. Must be one of: Low, High"):
            require_enum("low", ["Low", "High"], "priority")


class TestDates:
    def test_parse_date_only_is_midnight_utc(self):
        assert parse_date_value("2026-03-15") == datetime(2026, 3, 15, tzinfo=timezone.utc)

    def test_parse_zulu_timestamp(self):
        assert parse_date_value("2026-03-15T10:30:00Z") == datetime(2026, 3, 15, 10, 30, tzinfo=timezone.utc)

    def test_parse_garbage(self):
        with pytest.raises(ValidationError, match="Invalid deadline format"):
            parse_date_value("next tuesday")

    def test_parseable_allows_past(self):
        assert require_parseable_date("2001-01-01") == "2001-01-01"

    def test_parseable_none(self):
        assert require_parseable_date(None) is None

    def test_future_date_accepted(self):
        assert require_future_or_absent_date("2026-03-16", now=NOW) == "2026-03-16"

    def test_today_is_midnight_and_rejected(self):
        with pytest.raises(ValidationError, match="Deadline cannot be in the past"):
            require_future_or_absent_date("2026-03-15", now=NOW)

    def test_current_instant_accepted(self):
        assert require_future_or_absent_date("2026-03-15T12:00:00Z", now=NOW)

    def test_yesterday_rejected(self):
        with pytest.raises(ValidationError, match="Deadline cannot be in the past"):
            require_future_or_absent_date("2026-03-14", now=NOW)

    def test_past_timestamp_rejected(self):
        with pytest.raises(ValidationError, match="Deadline cannot be in the past"):
            require_future_or_absent_date("2026-03-15T11:00:00Z", now=NOW)

    def test_future_timestamp_accepted(self):
        assert require_future_or_absent_date("2026-03-15T13:00:00Z", now=NOW)

    def test_absent_accepted(self):
        assert require_future_or_absent_date(None, now=NOW) is None
