"""Date parsing utilities for filtering transaction history."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def _start_of(period: str, today: date) -> date:
    """Return the first day of the week, month or year containing today."""
    if period == "week":
        return today - timedelta(days=today.weekday())
    if period == "month":
        return today.replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1)
    raise ValueError(f"Unknown period '{period}'")


def _step(period: str) -> relativedelta:
    return {
        "week": relativedelta(weeks=1),
        "month": relativedelta(months=1),
        "year": relativedelta(years=1),
    }[period]


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "15 Jan 2024", etc.
    - "today", "yesterday"
    - "this week|month|year" and "last week|month|year", which resolve to
      the first day of that period (weeks start on Monday)

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    words = text.split()
    if len(words) == 2 and words[0] in ("this", "last") and words[1] in ("week", "month", "year"):
        start = _start_of(words[1], today)
        return start if words[0] == "this" else start - _step(words[1])

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole
    previous week, month or year.

    Raises:
        ValueError: If period string is not one of PERIODS
    """
    normalized = period.strip().lower()
    if normalized not in PERIODS:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )

    which, unit = normalized.split("-")
    today = date.today()
    current_start = _start_of(unit, today)
    if which == "this":
        return current_start, today
    return current_start - _step(unit), current_start - timedelta(days=1)
