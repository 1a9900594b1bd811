"""Business-day resolution and calendar helpers.

Every date comparison in the library goes through ``BusinessDayResolver`` so a
sale made at 00:30 is attributed to the same trading day wherever it is
counted.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from stall_books.config import StallSettings, get_settings
from stall_books.errors import InvalidTimestamp


@dataclass(frozen=True)
class BusinessDayResolver:
    """Maps timestamps to the trading day they belong to.

    The day starts at ``day_start_hour`` store-local time; with the default of
    0 the business day is the local calendar day.
    """

    tz: tzinfo
    day_start_hour: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.day_start_hour <= 23:
            raise ValueError(f"day_start_hour must be 0-23, got {self.day_start_hour}")

    @classmethod
    def from_settings(cls, settings: StallSettings | None = None) -> BusinessDayResolver:
        settings = settings or get_settings()
        try:
            tz = ZoneInfo(settings.timezone)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Unknown timezone: {settings.timezone}") from exc
        return cls(tz=tz, day_start_hour=settings.day_start_hour)

    def resolve(self, timestamp: datetime | str) -> date:
        """Return the business date for a timestamp.

        Naive datetimes are taken as store-local time. Strings must be ISO-8601;
        a trailing ``Z`` is read as UTC.
        """
        moment = _coerce_timestamp(timestamp)
        if moment.tzinfo is None:
            local = moment
        else:
            local = moment.astimezone(self.tz).replace(tzinfo=None)
        return (local - timedelta(hours=self.day_start_hour)).date()

    def today(self, now: datetime | None = None) -> date:
        """Business date for ``now`` (defaults to the current time)."""
        return self.resolve(now or datetime.now(self.tz))


def default_resolver() -> BusinessDayResolver:
    return BusinessDayResolver.from_settings()


def _coerce_timestamp(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidTimestamp(f"Invalid timestamp: {value!r}") from exc
    raise InvalidTimestamp(f"Invalid timestamp: {value!r}")


def parse_business_date(value: date | str) -> date:
    """Parse a ``YYYY-MM-DD`` business date."""
    if isinstance(value, datetime):
        raise InvalidTimestamp(f"Expected a date, got a datetime: {value!r}")
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as exc:
        raise InvalidTimestamp(f"Invalid business date: {value!r}") from exc


def year_month(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def parse_year_month(value: str) -> tuple[int, int]:
    """Split ``YYYY-MM`` into (year, month)."""
    try:
        year_text, month_text = value.split("-")
        year, month = int(year_text), int(month_text)
    except (AttributeError, ValueError) as exc:
        raise InvalidTimestamp(f"Invalid year-month: {value!r}") from exc
    if len(year_text) != 4 or len(month_text) != 2 or not 1 <= month <= 12:
        raise InvalidTimestamp(f"Invalid year-month: {value!r}")
    return year, month


def days_in_month(value: str) -> list[date]:
    """Every calendar day of a ``YYYY-MM`` month, in order."""
    year, month = parse_year_month(value)
    _, last_day = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last_day + 1)]


def recent_dates(end: date, count: int) -> list[date]:
    """The ``count`` calendar days ending at ``end``, oldest first."""
    if count < 1:
        return []
    return [end - timedelta(days=offset) for offset in range(count - 1, -1, -1)]
