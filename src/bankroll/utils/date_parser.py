"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_TIMEZONE_SUFFIX = re.compile(r"\s+[A-Z]{3}$")

# Look-back windows for the weekly progress view
RANGE_OFFSETS = {
    "1m": relativedelta(months=1),
    "3m": relativedelta(months=3),
    "6m": relativedelta(months=6),
    "12m": relativedelta(years=1),
}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2025-01-15", "January 15, 2025") and the
    relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str) -> datetime:
    """Parse a date/time string into a naive local datetime.

    Accepts "now" and anything dateutil understands. Values carrying an
    offset ("2025-01-01T19:00Z") are converted to local time.

    Raises:
        ValueError: If the string cannot be parsed
    """
    value = value.strip()
    if value.lower() == "now":
        return datetime.now()

    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date/time '{value}': {e}")
    return to_local_naive(parsed)


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def expand_two_digit_year(year: int) -> int:
    """Expand a two-digit year: below 50 is 20xx, otherwise 19xx."""
    return 2000 + year if year < 50 else 1900 + year


def parse_platform_timestamp(value: str) -> datetime:
    """Parse the platform export timestamp format.

    Example: "06/13/25, 4:58 PM CDT" -> 2025-06-13 16:58.

    The trailing timezone abbreviation is dropped, not converted, so the
    result is the wall-clock time read as local time.

    Raises:
        ValueError: If the value does not match the format
    """
    cleaned = _TIMEZONE_SUFFIX.sub("", value.strip())

    parts = cleaned.split(", ")
    if len(parts) != 2:
        raise ValueError(f"Could not parse platform timestamp '{value}'")
    date_part, time_part = parts

    pieces = date_part.split("/")
    if len(pieces) != 3:
        raise ValueError(f"Could not parse platform timestamp '{value}'")
    month, day, year = pieces

    try:
        if len(year) == 2:
            full_year = expand_two_digit_year(int(year))
        elif len(year) == 4:
            full_year = int(year)
        else:
            raise ValueError(f"unexpected year '{year}'")
        local_str = f"{full_year:04d}-{int(month):02d}-{int(day):02d} {time_part}"
        return date_parser.parse(local_str)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse platform timestamp '{value}': {e}")


def range_start(range_code: str, today: Optional[date] = None) -> Optional[date]:
    """Return the first day covered by a relative range code.

    Args:
        range_code: One of 1m, 3m, 6m, 12m or all
        today: Reference date, defaults to today

    Returns:
        Start date, or None for the unbounded "all" range

    Raises:
        ValueError: If range code is not recognized
    """
    if range_code == "all":
        return None
    if range_code not in RANGE_OFFSETS:
        raise ValueError(
            f"Unknown range: '{range_code}'. Supported ranges: 1m, 3m, 6m, 12m, all"
        )
    today = today or date.today()
    return today - RANGE_OFFSETS[range_code]


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, this-year, last-month, last-year

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, last-month, last-year"
        )
