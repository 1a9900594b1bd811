"""Tests for business-day resolution and calendar helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from stall_books.business_day import (
    BusinessDayResolver,
    days_in_month,
    parse_business_date,
    parse_year_month,
    recent_dates,
    year_month,
)
from stall_books.config import get_settings
from stall_books.errors import InvalidTimestamp

WIB = timezone(timedelta(hours=7))


class TestBusinessDayResolver:
    """Tests for BusinessDayResolver."""

    def test_midnight_boundary_uses_store_timezone(self):
        """UTC 18:00 is already the next day on UTC+7."""
        resolver = BusinessDayResolver(tz=WIB)

        assert resolver.resolve(datetime(2025, 3, 14, 16, 59, tzinfo=timezone.utc)) == date(2025, 3, 14)
        assert resolver.resolve(datetime(2025, 3, 14, 17, 0, tzinfo=timezone.utc)) == date(2025, 3, 15)

    def test_shifted_day_start(self):
        """Sales after midnight but before the start hour belong to the previous day."""
        resolver = BusinessDayResolver(tz=WIB, day_start_hour=4)

        assert resolver.resolve(datetime(2025, 3, 15, 2, 30, tzinfo=WIB)) == date(2025, 3, 14)
        assert resolver.resolve(datetime(2025, 3, 15, 4, 0, tzinfo=WIB)) == date(2025, 3, 15)

    def test_naive_timestamp_is_store_local(self):
        """Naive timestamps are read as store-local time."""
        resolver = BusinessDayResolver(tz=WIB)
        assert resolver.resolve(datetime(2025, 3, 14, 23, 59)) == date(2025, 3, 14)

    def test_iso_string_with_z_suffix(self):
        """ISO strings ending in Z are converted from UTC."""
        resolver = BusinessDayResolver(tz=WIB)
        assert resolver.resolve("2025-03-14T18:30:00.000Z") == date(2025, 3, 15)

    def test_invalid_timestamp_rejected(self):
        """Unparseable timestamps raise InvalidTimestamp."""
        resolver = BusinessDayResolver(tz=WIB)

        with pytest.raises(InvalidTimestamp):
            resolver.resolve("yesterday")
        with pytest.raises(InvalidTimestamp):
            resolver.resolve(12345)  # type: ignore[arg-type]

    def test_start_hour_out_of_range(self):
        """A day start hour outside 0-23 is refused."""
        with pytest.raises(ValueError):
            BusinessDayResolver(tz=WIB, day_start_hour=24)

    def test_today_uses_given_clock(self):
        """today() resolves the supplied moment."""
        resolver = BusinessDayResolver(tz=WIB, day_start_hour=4)
        assert resolver.today(datetime(2025, 3, 15, 1, 0, tzinfo=WIB)) == date(2025, 3, 14)

    def test_from_settings(self):
        """The resolver takes timezone and start hour from settings."""
        get_settings.cache_clear()
        resolver = BusinessDayResolver.from_settings()

        assert resolver.day_start_hour == 0
        assert resolver.resolve(datetime(2025, 3, 14, 17, 0, tzinfo=timezone.utc)) == date(2025, 3, 15)


class TestCalendarHelpers:
    """Tests for date helper functions."""

    def test_parse_business_date(self):
        """Dates parse from ISO strings and pass through unchanged."""
        assert parse_business_date("2025-03-14") == date(2025, 3, 14)
        assert parse_business_date(date(2025, 3, 14)) == date(2025, 3, 14)

    def test_parse_business_date_rejects_garbage(self):
        """Non-date input raises InvalidTimestamp."""
        with pytest.raises(InvalidTimestamp):
            parse_business_date("14/03/2025")

    def test_year_month(self):
        """year_month formats a date as YYYY-MM."""
        assert year_month(date(2025, 3, 1)) == "2025-03"
        assert parse_year_month("2025-03") == (2025, 3)

    @pytest.mark.parametrize("value", ["2025-13", "2025-3", "25-03", "2025-003", "March"])
    def test_parse_year_month_rejects_bad_month(self, value):
        """Months outside 01-12 or not written as YYYY-MM are rejected."""
        with pytest.raises(InvalidTimestamp):
            parse_year_month(value)

    def test_days_in_month_handles_leap_year(self):
        """February of a leap year has 29 days."""
        days = days_in_month("2024-02")

        assert len(days) == 29
        assert days[0] == date(2024, 2, 1)
        assert days[-1] == date(2024, 2, 29)

    def test_recent_dates_oldest_first(self):
        """The window ends at the given day, oldest first."""
        days = recent_dates(date(2025, 3, 1), 3)
        assert days == [date(2025, 2, 27), date(2025, 2, 28), date(2025, 3, 1)]

    def test_recent_dates_empty_window(self):
        """A zero-length window is empty."""
        assert recent_dates(date(2025, 3, 1), 0) == []
