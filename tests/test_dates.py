"""
Tests for saved-recipe date labels.

All tests render in UTC against a fixed "now" (Monday 19 Oct 2026, 15:30 UTC).
"""

from datetime import datetime, timedelta, timezone

import pytest

from chef.dates import format_relative, get_date_info, parse_timestamp, to_iso

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)
UTC = timezone.utc


class TestRelativeLabel:
    """Test cases for the relative-time label."""

    def test_two_hours_ago_is_time_of_day(self):
        assert format_relative(NOW - timedelta(hours=2), now=NOW, tz=UTC) == "01:30 PM"

    def test_three_days_ago_is_weekday_and_time(self):
        assert format_relative(NOW - timedelta(days=3), now=NOW, tz=UTC) == "Fri 03:30 PM"

    def test_thirty_days_ago_is_month_and_day(self):
        assert format_relative(NOW - timedelta(days=30), now=NOW, tz=UTC) == "Sep 19"

    def test_just_under_a_day_is_still_time_of_day(self):
        label = format_relative(NOW - timedelta(hours=23, minutes=59), now=NOW, tz=UTC)
        assert label == "03:31 PM"

    def test_exactly_a_day_switches_to_weekday(self):
        assert format_relative(NOW - timedelta(hours=24), now=NOW, tz=UTC) == "Sun 03:30 PM"

    def test_exactly_a_week_switches_to_month_day(self):
        assert format_relative(NOW - timedelta(hours=168), now=NOW, tz=UTC) == "Oct 12"

    def test_future_timestamp_is_time_of_day(self):
        assert format_relative(NOW + timedelta(hours=1), now=NOW, tz=UTC) == "04:30 PM"

    def test_accepts_iso_strings_with_z_suffix(self):
        assert format_relative("2026-10-19T13:30:00.000Z", now=NOW, tz=UTC) == "01:30 PM"


class TestDateInfo:
    """Test cases for get_date_info."""

    def test_absolute_fields(self):
        info = get_date_info(NOW - timedelta(hours=2), now=NOW, tz=UTC)
        assert info.date == "10/19/2026"
        assert info.time == "01:30 PM"
        assert info.full_date_time == "10/19/2026, 1:30:00 PM"
        assert info.relative_time == "01:30 PM"

    def test_rendered_in_requested_timezone(self):
        plus_two = timezone(timedelta(hours=2))
        info = get_date_info("2026-10-19T23:15:00+00:00", now=NOW, tz=plus_two)
        assert info.date == "10/20/2026"
        assert info.time == "01:15 AM"

    def test_round_trip_through_dict(self):
        info = get_date_info(NOW, now=NOW, tz=UTC)
        data = info.to_dict()
        assert set(data) == {"date", "time", "fullDateTime", "relativeTime"}
        assert type(info).from_dict(data) == info

    def test_incomplete_dict_gives_none(self):
        info = get_date_info(NOW, now=NOW, tz=UTC)
        assert type(info).from_dict({"date": "10/19/2026"}) is None
        assert type(info).from_dict(None) is None


class TestTimestampParsing:
    def test_naive_values_are_utc(self):
        assert parse_timestamp("2026-10-19T15:30:00") == NOW

    def test_to_iso_normalises_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        assert to_iso(datetime(2026, 10, 19, 17, 30, tzinfo=plus_two)) == "2026-10-19T15:30:00+00:00"

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday-ish")
